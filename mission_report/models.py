"""Mission Report Data Model

Immutable input records handed to the layout core. Field-level validation
(required fields, upload checks) belongs to the form collaborator; these
dataclasses only enforce types the layout depends on.
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .exceptions import InvalidMissionDataError

_DMY_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")

# camelCase keys sent by the form collaborator -> field names
_MISSION_ALIASES = {
    "pilotName": "pilot_name",
    "instructorName": "instructor_name",
    "missionType": "mission_type",
    "missionName": "mission_name",
    "map": "map_name",
    "pilotPhoto": "pilot_photo",
    "performanceData": "rounds",
}

_ROUND_ALIASES = {
    "graphic": "chart_image",
    "chartImage": "chart_image",
    "roundNumber": "number",
}


@dataclass(frozen=True)
class ShotRecord:
    """One shot measurement within a round."""
    number: int
    speed: float
    altitude: float
    distance: float
    hit: bool

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ShotRecord":
        try:
            return cls(
                number=int(payload["number"]),
                speed=float(payload["speed"]),
                altitude=float(payload["altitude"]),
                distance=float(payload["distance"]),
                hit=_parse_bool(payload.get("hit", False)),
            )
        except KeyError as e:
            raise InvalidMissionDataError(f"shots.{e.args[0]}", "missing") from e
        except (TypeError, ValueError) as e:
            raise InvalidMissionDataError("shots", str(e)) from e


@dataclass(frozen=True)
class RoundRecord:
    """One shooting sequence: an optional chart image and its shots.

    Attributes:
        number: 1-based round number
        chart_image: Image reference, or None when no chart was supplied
        shots: Shot measurements in input order (may be empty)
    """
    number: int
    chart_image: Optional[Any] = None
    shots: Tuple[ShotRecord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.number < 1:
            raise InvalidMissionDataError("rounds.number", f"must be positive, got {self.number}")
        # Accept lists from callers while keeping the record immutable
        if not isinstance(self.shots, tuple):
            object.__setattr__(self, "shots", tuple(self.shots))

    @property
    def hit_count(self) -> int:
        return sum(1 for shot in self.shots if shot.hit)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], index: int = 0) -> "RoundRecord":
        data = _apply_aliases(payload, _ROUND_ALIASES)
        try:
            number = int(data.get("number", index + 1))
        except (TypeError, ValueError) as e:
            raise InvalidMissionDataError("rounds.number", str(e)) from e
        shots = tuple(ShotRecord.from_dict(shot) for shot in data.get("shots") or ())
        return cls(number=number, chart_image=data.get("chart_image") or None, shots=shots)


@dataclass(frozen=True)
class MissionReportData:
    """Everything a mission report is rendered from.

    Attributes:
        pilot_name: Pilot full name
        instructor_name: Instructor full name
        date: Mission date (date object, ISO string or DD/MM/YYYY string)
        mission_type: Mission type label
        aircraft: Aircraft flown
        mission_name: Optional mission name
        map_name: Optional map name
        pilot_photo: Optional image reference
        rounds: Rounds in the order they are rendered
    """
    pilot_name: str
    instructor_name: str
    date: Union[date, str]
    mission_type: str
    aircraft: str
    mission_name: Optional[str] = None
    map_name: Optional[str] = None
    pilot_photo: Optional[Any] = None
    rounds: Tuple[RoundRecord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.rounds, tuple):
            object.__setattr__(self, "rounds", tuple(self.rounds))

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    @property
    def mission_date(self) -> Optional[date]:
        """The mission date as a date object, or None if it cannot be parsed."""
        return parse_date(self.date)

    @property
    def formatted_date(self) -> str:
        """Mission date as DD/MM/YYYY; unparseable strings are returned as-is."""
        if isinstance(self.date, str) and _DMY_RE.match(self.date):
            return self.date
        parsed = self.mission_date
        if parsed is None:
            return str(self.date or "")
        return parsed.strftime("%d/%m/%Y")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MissionReportData":
        """
        Build mission data from a form payload.

        Accepts snake_case field names or the camelCase keys used by the
        form (``pilotName``, ``rounds[].graphic`` ...).

        Raises:
            InvalidMissionDataError: If a required field is missing or malformed
        """
        data = _apply_aliases(payload, _MISSION_ALIASES)
        for required in ("pilot_name", "instructor_name", "date", "mission_type", "aircraft"):
            if required not in data:
                raise InvalidMissionDataError(required, "missing")

        raw_rounds = data.get("rounds") or []
        if not isinstance(raw_rounds, list):
            raise InvalidMissionDataError("rounds", "must be a list")
        rounds = tuple(RoundRecord.from_dict(r, index) for index, r in enumerate(raw_rounds))

        return cls(
            pilot_name=str(data["pilot_name"]),
            instructor_name=str(data["instructor_name"]),
            date=data["date"],
            mission_type=str(data["mission_type"]),
            aircraft=str(data["aircraft"]),
            mission_name=data.get("mission_name") or None,
            map_name=data.get("map_name") or None,
            pilot_photo=data.get("pilot_photo") or None,
            rounds=rounds,
        )


def parse_date(value: Union[date, str, None]) -> Optional[date]:
    """
    Parse a date given as a date/datetime, an ISO string or DD/MM/YYYY.

    Returns:
        The parsed date, or None if the value cannot be interpreted
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    return None


def _apply_aliases(payload: Mapping[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidMissionDataError("payload", f"expected an object, got {type(payload).__name__}")
    data = {}
    for key, value in payload.items():
        data[aliases.get(key, key)] = value
    return data


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "hit", "y")
    return bool(value)
