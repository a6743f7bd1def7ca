"""Stage label coding.

Stage labels have the form ``"<trail>_<stage>"`` (for example ``"5_1"``
is stage 1 of Öresundsleden). The trail code must map to one of the
known Skåneleden trails; anything else is a data integrity violation.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .errors import UnknownStageError

STAGE_SEPARATOR = "_"


class Trail(Enum):
    """The Skåneleden trails, keyed by their numeric code."""

    KUST_KUSTLEDEN = "1"
    NORD_SYDLEDEN = "2"
    AS_ASLEDEN = "3"
    OSTERLENLEDEN = "4"
    ORESUNDSLEDEN = "5"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Trail.KUST_KUSTLEDEN: "Kust-kustleden",
    Trail.NORD_SYDLEDEN: "Nord-sydleden",
    Trail.AS_ASLEDEN: "Ås-åsleden",
    Trail.OSTERLENLEDEN: "Österlenleden",
    Trail.ORESUNDSLEDEN: "Öresundsleden",
}


def parse_stage_label(label: str) -> Tuple[Trail, str]:
    """Split a stage label into its trail and stage number.

    Raises:
        UnknownStageError: If the label is malformed or the trail code
            is not known.
    """
    code, sep, stage = label.partition(STAGE_SEPARATOR)
    if not sep or not stage:
        raise UnknownStageError(f"Malformed stage label {label!r}", label=label)
    try:
        trail = Trail(code)
    except ValueError as e:
        raise UnknownStageError(
            f"Unknown trail code {code!r} in stage label {label!r}",
            label=label,
            cause=e,
        )
    return trail, stage


def _stage_sort_key(stage: str) -> Tuple[int, str]:
    return (int(stage), "") if stage.isdigit() else (10**9, stage)


def describe_stages(labels: Iterable[str]) -> str:
    """Render stage labels as ``"Öresundsleden etapp 1, 2"``.

    Labels are grouped per trail; trails are listed in code order and
    stage numbers ascending.
    """
    grouped: Dict[Trail, List[str]] = {}
    for label in labels:
        if not label:
            continue
        trail, stage = parse_stage_label(label)
        stages = grouped.setdefault(trail, [])
        if stage not in stages:
            stages.append(stage)

    parts = []
    for trail in Trail:
        if trail not in grouped:
            continue
        stages = sorted(grouped[trail], key=_stage_sort_key)
        parts.append(f"{trail.display_name} etapp {', '.join(stages)}")
    return ", ".join(parts)
