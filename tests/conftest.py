"""Shared fixtures: the virtualized two-object category and a short loose chain."""

import pytest

from equipment_lab.category import two_object_category
from equipment_lab.equipment import (
    Cell,
    Proarrow,
    TightEvidence,
    VerticalBoundary,
    frame_from_proarrow,
    identity_proarrow,
    identity_vertical_boundary,
    virtualize_category,
)
from equipment_lab.extensions import RightExtensionData, RightLiftData
from equipment_lab.limits import WeightedCoconeData, WeightedConeData
from equipment_lab.tight import constant_functor, identity_nat


@pytest.fixture
def two_object():
    return two_object_category()


@pytest.fixture
def equipment(two_object):
    return virtualize_category(two_object, weak_composition=True)


@pytest.fixture
def collapse(two_object):
    """Constant functor onto ★."""
    return constant_functor(two_object, "★")


@pytest.fixture
def chain(equipment, collapse):
    """f: • ⇸ ★ followed by three endo-arrows on ★."""
    identity = equipment.tight.identity
    return (
        Proarrow("•", "★", collapse),
        Proarrow("★", "★", identity),
        Proarrow("★", "★", collapse),
        Proarrow("★", "★", identity),
    )


@pytest.fixture
def cone_data(equipment, collapse):
    """Cone over the weight • ⇸ ★ with apex id★ and diagram ``collapse``."""
    weight = frame_from_proarrow(Proarrow("•", "★", collapse))
    apex = identity_proarrow(equipment, "★")
    cone = Cell(
        weight,
        frame_from_proarrow(apex),
        VerticalBoundary("•", "★", collapse),
        identity_vertical_boundary(equipment, "★"),
        TightEvidence(identity_nat(collapse)),
    )
    return WeightedConeData(weight, collapse, apex, cone)


@pytest.fixture
def cocone_data(equipment, collapse):
    """Cocone under the weight • ⇸ ★ with apex the weight arrow itself."""
    p = Proarrow("•", "★", collapse)
    weight = frame_from_proarrow(p)
    cocone = Cell(
        weight,
        frame_from_proarrow(p),
        identity_vertical_boundary(equipment, "•"),
        VerticalBoundary("★", "★", collapse),
        TightEvidence(identity_nat(collapse)),
    )
    return WeightedCoconeData(weight, collapse, p, cocone)


@pytest.fixture
def extension_data(equipment, collapse):
    """Right extension of • ⇸ ★ along ``collapse`` with counit [p] => [id★]."""
    loose = Proarrow("•", "★", collapse)
    candidate = identity_proarrow(equipment, "★")
    counit = Cell(
        frame_from_proarrow(loose),
        frame_from_proarrow(candidate),
        identity_vertical_boundary(equipment, "•"),
        identity_vertical_boundary(equipment, "★"),
        TightEvidence(identity_nat(collapse)),
    )
    return RightExtensionData(loose, collapse, candidate, counit)


@pytest.fixture
def lift_data(extension_data):
    """Right lift mirroring ``extension_data``: unit [id★] => [p]."""
    counit = extension_data.counit
    unit = Cell(counit.target, counit.source, counit.left, counit.right, counit.evidence)
    return RightLiftData(extension_data.loose, extension_data.along, extension_data.extension, unit)
