"""
Django-Sieve Decorators

Provides function decorators for adding sieve query parsing to Django
views.

Features:
- sieve_query decorator for function-based views
- 400 responses for invalid page/sort/filter parameters
- Optional queryset execution with mandatory filters
- before_query / after_query hooks and a custom handler override
"""

from dataclasses import replace
from functools import wraps
import inspect
import logging

from asgiref.sync import async_to_sync

from django_sieve.parser import parse_sieve_query
from django_sieve.query import SieveQuerySet
from django_sieve.response import SieveResponse
from django_sieve.types import SieveConfig

logger = logging.getLogger("django_sieve")


async def _await(awaitable):
    return await awaitable


def run_hook(hook, *args):
    """Call a sync or async hook and return its result."""
    result = hook(*args)
    if inspect.isawaitable(result):
        result = async_to_sync(_await)(result)
    return result


def sieve_query(
    config=None,
    source=None,
    mandatory_filters=None,
    transform=None,
    before_query=None,
    after_query=None,
    handler=None,
):
    """
    Decorator for adding sieve query parsing to a view.

    The decorated view receives a ``sieve`` keyword argument holding the
    ParseOutcome. When ``source`` or ``handler`` is given, the query is
    also executed and the page is passed as ``result``.

    Hooks may be plain functions or coroutine functions.

    Args:
        config: SieveConfig or config dict for this endpoint
        source: Optional model class or queryset to execute against
        mandatory_filters: Filter clauses always applied (requires source)
        transform: Optional callable applied to each row of the page
        before_query: Optional ``hook(request, query)`` returning the
            SieveQuery to run instead of the parsed one
        after_query: Optional ``hook(result, request)`` returning the
            result to pass to the view
        handler: Optional ``handler(request, query, config)`` that
            produces the result in place of executing against ``source``

    Example:
        from django_sieve import sieve_query, SieveResponse
        from myapp.models import Product

        @sieve_query(
            config={
                'sortableFields': ['createdAt', 'price'],
                'filterableFields': [
                    {'field': 'price', 'operators': ['>', '<'], 'type': 'number'},
                ],
            },
            source=Product.objects.all(),
            transform=lambda p: {'id': p.pk, 'name': p.name},
        )
        def product_list(request, sieve, result):
            return SieveResponse.ok_query(
                data=result.pop('data'),
                pagination=result,
                warnings=sieve.warnings,
            ).to_json_response()
    """
    config = SieveConfig.coerce(config)

    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            outcome = parse_sieve_query(request.GET, config)
            if not outcome.is_valid:
                logger.info(
                    "Rejected sieve query for %s: %s",
                    request.path,
                    "; ".join(e.message for e in outcome.errors),
                )
                return SieveResponse.from_outcome(outcome).to_json_response()

            try:
                if before_query is not None:
                    outcome = replace(outcome, query=run_hook(before_query, request, outcome.query))

                if handler is not None:
                    result = run_hook(handler, request, outcome.query, config)
                elif source is not None:
                    result = SieveQuerySet(source, mandatory_filters=mandatory_filters).execute(
                        outcome.query, transform=transform
                    )
                else:
                    result = None

                if result is not None and after_query is not None:
                    result = run_hook(after_query, result, request)
            except Exception as e:
                logger.exception("Sieve query error for %s", request.path)
                return SieveResponse.error("INTERNAL_ERROR", str(e) or None).to_json_response()

            if handler is None and source is None:
                return view_func(request, *args, sieve=outcome, **kwargs)
            return view_func(request, *args, sieve=outcome, result=result, **kwargs)

        return wrapped_view

    return decorator
