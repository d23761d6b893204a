"""
Placement of homepage sections from their ``config.location`` directive.

Buckets, in output order:

* ``top`` sections, in input order;
* sections without a location, in input order (placed before any
  ``after-section-<id>`` is resolved so they can serve as anchors);
* ``after-section-<id>`` sections, spliced right after their anchor by
  repeated passes until nothing moves or the pass budget
  (3 x section count) runs out, which lets chained references resolve;
* ``bottom`` sections, in input order;
* anything still unplaced (dangling or cyclic references, unknown
  directives), in input order. These are reported, never dropped.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from homepage.sections import LOCATION_TOP, LOCATION_BOTTOM, AFTER_SECTION_PREFIX

logger = logging.getLogger(__name__)

ITERATION_FACTOR = 3


@dataclass
class OrderResult:
    sections: List = field(default_factory=list)
    iterations: int = 0
    # ids of after-section sections whose anchor never resolved
    unresolved: List[str] = field(default_factory=list)

    @property
    def gave_up(self):
        return bool(self.unresolved)

    @property
    def ids(self):
        return [s.id for s in self.sections]


def anchor_id(location):
    """Target id of an ``after-section-<id>`` directive, else None"""
    if location and location.startswith(AFTER_SECTION_PREFIX):
        return location[len(AFTER_SECTION_PREFIX):]
    return None


def order_sections(sections, logger=logger):
    """Order eligible sections; returns an OrderResult"""
    placed = []
    # by identity: records may share an id (or have none) and all must be kept
    placed_keys = set()

    def place(section, index=None):
        if index is None:
            placed.append(section)
        else:
            placed.insert(index, section)
        placed_keys.add(id(section))

    for section in sections:
        if section.location == LOCATION_TOP:
            place(section)

    for section in sections:
        if id(section) not in placed_keys and not section.location:
            place(section)

    pending = [s for s in sections if id(s) not in placed_keys and anchor_id(s.location) is not None]
    budget = len(sections) * ITERATION_FACTOR
    iterations = 0
    changed = True

    while changed and pending and iterations < budget:
        changed = False
        iterations += 1
        still_pending = []
        for section in pending:
            target = anchor_id(section.location)
            position = next((i for i, s in enumerate(placed) if s.id == target), None)
            if position is not None:
                place(section, position + 1)
                changed = True
            else:
                still_pending.append(section)
        pending = still_pending

    unresolved = []
    unresolved_keys = {id(s) for s in pending}
    for section in pending:
        logger.warning(
            f"Section {section.name!r} ({section.id}) references missing or unresolvable "
            f"anchor {anchor_id(section.location)!r}; appending at the end"
        )
        unresolved.append(section.id)

    for section in sections:
        if id(section) not in placed_keys and section.location == LOCATION_BOTTOM:
            place(section)

    for section in sections:
        if id(section) not in placed_keys:
            if id(section) not in unresolved_keys:
                logger.warning(f"Section {section.name!r} has unknown location {section.location!r}; appending at the end")
            place(section)

    logger.debug(f"Section order: {[s.id for s in placed]} after {iterations} pass(es)")
    return OrderResult(sections=placed, iterations=iterations, unresolved=unresolved)
