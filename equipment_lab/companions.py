from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .equipment import (
    CartesianCell,
    Proarrow,
    RepresentabilityWitness,
    VirtualEquipment,
    identity_proarrow,
    object_equality,
)


@dataclass(frozen=True)
class CompanionAttempt:
    """Outcome of searching the carrier for a companion or conjoint."""

    available: bool
    details: str
    restricted: Optional[Proarrow] = None
    cartesian: Optional[CartesianCell] = None
    representability: Optional[RepresentabilityWitness] = None


def companion_via_identity_restrictions(equipment: VirtualEquipment, tight: Any) -> CompanionAttempt:
    """First d in carrier order whose left restriction B(tight, 1) of id_{tight(d)} runs d ⇸ tight(d)."""
    if not equipment.objects:
        return CompanionAttempt(False, "Companion search failed: no objects registered in the equipment.")
    same = object_equality(equipment)
    failures: List[str] = []
    for d in equipment.objects:
        c = tight.on_obj(d)
        result = equipment.restrictions.left(tight, identity_proarrow(equipment, c))
        if result is None:
            failures.append(f"left restriction of id_{c} along the tight 1-cell was unavailable at {d}")
            continue
        restricted = result.restricted
        if not (same(restricted.src, d) and same(restricted.dst, c)):
            failures.append(
                f"left restriction at {d} produced {restricted.src} ⇸ {restricted.dst}, expected {d} ⇸ {c}"
            )
            continue
        return CompanionAttempt(
            True,
            f"Companion found at {d}: left restriction of id_{c} realizes {d} ⇸ {c}.",
            restricted,
            result.cartesian,
            result.representability,
        )
    return CompanionAttempt(False, "Companion search failed: " + "; ".join(failures) + ".")


def conjoint_via_identity_restrictions(equipment: VirtualEquipment, tight: Any) -> CompanionAttempt:
    """First d in carrier order whose right restriction B(1, tight) of id_{tight(d)} runs tight(d) ⇸ d.

    The conjoint is oriented tight(d) ⇸ d, mirroring the companion's
    d ⇸ tight(d). For a constant functor onto c it is therefore found only
    at d = c, and its ``src`` is c.
    """
    if not equipment.objects:
        return CompanionAttempt(False, "Conjoint search failed: no objects registered in the equipment.")
    same = object_equality(equipment)
    failures: List[str] = []
    for d in equipment.objects:
        c = tight.on_obj(d)
        result = equipment.restrictions.right(identity_proarrow(equipment, c), tight)
        if result is None:
            failures.append(f"right restriction of id_{c} along the tight 1-cell was unavailable at {d}")
            continue
        restricted = result.restricted
        if not (same(restricted.src, c) and same(restricted.dst, d)):
            failures.append(
                f"right restriction at {d} produced {restricted.src} ⇸ {restricted.dst}, expected {c} ⇸ {d}"
            )
            continue
        return CompanionAttempt(
            True,
            f"Conjoint found at {d}: right restriction of id_{c} realizes {c} ⇸ {d}.",
            restricted,
            result.cartesian,
            result.representability,
        )
    return CompanionAttempt(False, "Conjoint search failed: " + "; ".join(failures) + ".")
