"""Single primitive for maintaining denormalized counters."""

import logging

logger = logging.getLogger(__name__)


def adjust_counter(model, pk, field, delta):
    """
    Add `delta` to `model.<field>` for the row `pk` and return the new value.

    The row is locked for the rest of the caller's transaction, so this must run
    inside the same `atomic()` block as the write that changed the underlying
    fact (edge, like or comment). The value never drops below zero; a clamp
    means the counter had already drifted and is logged as such.
    """
    row = model.objects.select_for_update().get(pk=pk)
    current = getattr(row, field) or 0
    updated = current + delta
    if updated < 0:
        logger.warning(
            "Counter inconsistency: %s(%s).%s is %s, delta %s; clamping to 0",
            model.__name__,
            pk,
            field,
            current,
            delta,
        )
        updated = 0
    if updated != current:
        setattr(row, field, updated)
        row.save(update_fields=[field])
    return updated
