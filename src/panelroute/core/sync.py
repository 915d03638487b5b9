"""Master contour synchronization across placements of the same design.

For every board design one placement acts as the master: the instance
nearest the panel origin. Manually created contours on the master are
copied onto every sibling placement by rigid translation.

Copies are recomputed from scratch on every call. A copy keeps its id
across recomputation when a copy of the same master contour already
existed for the same sibling, so renderers can keep stable identities.

Rigid translation is only correct when siblings share the master's
rotation. With strict_orientation the sync skips siblings whose rotation
differs instead of producing misplaced geometry.
"""

import math
import uuid
from collections.abc import Callable, Sequence

from panelroute.domain import BoardInstance, CreationMethod, RoutingContour


def new_contour_id() -> str:
    """Generate a fresh contour id."""
    return str(uuid.uuid4())


def get_master_instance(
    instances: Sequence[BoardInstance], board_id: str
) -> BoardInstance | None:
    """Placement of a design nearest the panel origin (first wins ties)."""
    master: BoardInstance | None = None
    best = math.inf
    for instance in instances:
        if instance.board_id != board_id:
            continue
        distance = math.hypot(instance.position.x, instance.position.y)
        if distance < best:
            master = instance
            best = distance
    return master


def is_master_instance(instances: Sequence[BoardInstance], instance: BoardInstance) -> bool:
    """True when the placement is the master of its design."""
    master = get_master_instance(instances, instance.board_id)
    return master is not None and master.id == instance.id


def sync_master_contours(
    instances: Sequence[BoardInstance],
    contours: Sequence[RoutingContour],
    id_factory: Callable[[], str] = new_contour_id,
    strict_orientation: bool = False,
) -> list[RoutingContour]:
    """Recompute every sync copy from the master placements' contours.

    Args:
        instances: All board placements on the panel
        contours: Current routing contours, including stale sync copies
        id_factory: Id generator for copies that did not exist before
        strict_orientation: Skip siblings whose rotation differs from the master

    Returns:
        The non-copy contours in their original order, followed by fresh copies
    """
    existing_ids = {
        (c.master_contour_id, c.board_instance_id): c.id for c in contours if c.is_sync_copy
    }
    originals = [c for c in contours if not c.is_sync_copy]

    if len(instances) <= 1:
        return originals

    by_id = {instance.id: instance for instance in instances}
    masters: dict[str, BoardInstance | None] = {}

    copies: list[RoutingContour] = []
    for contour in originals:
        if contour.creation_method == CreationMethod.AUTO or contour.board_instance_id is None:
            continue
        owner = by_id.get(contour.board_instance_id)
        if owner is None:
            continue

        if owner.board_id not in masters:
            masters[owner.board_id] = get_master_instance(instances, owner.board_id)
        master = masters[owner.board_id]
        if master is None or master.id != owner.id:
            continue

        for sibling in instances:
            if sibling.board_id != master.board_id or sibling.id == master.id:
                continue
            if strict_orientation and sibling.rotation != master.rotation:
                continue

            dx = sibling.position.x - master.position.x
            dy = sibling.position.y - master.position.y
            copy_id = existing_ids.get((contour.id, sibling.id)) or id_factory()

            copies.append(
                RoutingContour(
                    id=copy_id,
                    contour_type=contour.contour_type,
                    segments=[seg.translated(dx, dy) for seg in contour.segments],
                    tool_diameter=contour.tool_diameter,
                    board_instance_id=sibling.id,
                    visible=contour.visible,
                    creation_method=contour.creation_method,
                    outline_direction=contour.outline_direction,
                    master_contour_id=contour.id,
                    is_sync_copy=True,
                )
            )

    return originals + copies
