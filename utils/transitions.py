"""
Status transitions for models that carry a ``status`` field.

A model opts in by declaring ``STATUS_TRANSITIONS``: a mapping from each status
to the set of statuses it may move to. ``transition`` checks the table and then
issues a conditional ``UPDATE ... WHERE status = <current>`` so two concurrent
writers cannot both move the same row.
"""
import logging

from django.utils import timezone

logger = logging.getLogger(__name__)


class InvalidTransition(Exception):
    """The requested status change is not in the model's transition table."""

    def __init__(self, model_name, from_status, to_status):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"{model_name} cannot move from {from_status!r} to {to_status!r}")


class StaleStatus(Exception):
    """The row's status changed between the read and the conditional update."""


def can_transition(model, from_status, to_status) -> bool:
    return to_status in model.STATUS_TRANSITIONS.get(from_status, frozenset())


def transition(instance, to_status, **fields):
    """
    Move ``instance`` to ``to_status`` and write ``fields`` alongside it.

    Raises ``InvalidTransition`` if the table forbids the move and
    ``StaleStatus`` if another request moved the row first. On success the
    in-memory instance is updated and returned.
    """
    model = type(instance)
    from_status = instance.status
    if not can_transition(model, from_status, to_status):
        raise InvalidTransition(model.__name__, from_status, to_status)

    values = dict(fields, status=to_status)
    if any(f.name == 'updated_at' for f in model._meta.concrete_fields):
        values.setdefault('updated_at', timezone.now())

    updated = model.objects.filter(pk=instance.pk, status=from_status).update(**values)
    if updated != 1:
        raise StaleStatus(f"{model.__name__} {instance.pk} is no longer {from_status!r}")

    for name, value in values.items():
        setattr(instance, name, value)
    logger.info(f"{model.__name__} {instance.pk}: {from_status} -> {to_status}")
    return instance
