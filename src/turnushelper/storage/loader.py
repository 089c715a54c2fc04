"""Loading rotation schedules and absences from YAML or JSON files.

Schedule files hold a single record:

    name: Alpha
    start: 2024-01-01T00:00:00Z
    days:
      0: Day
      1: Night
    soldiers:
      - A
      - B

(`cycle` and `members` are accepted in place of `days` and `soldiers`.)

The absence file holds a list of records:

    - name: A
      from: 2024-01-01T00:00:00Z
      to: 2024-01-05T00:00:00Z
      reason: training

Loading is strict: any unreadable file or malformed record raises
DataLoadError and nothing is returned.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml

from turnushelper.domain.errors import DataLoadError
from turnushelper.domain.models import (
    AbsenceInterval,
    DutyType,
    RotationSchedule,
    to_utc,
)

logger = logging.getLogger(__name__)

SCHEDULE_SUFFIXES = (".yml", ".yaml", ".json")


def read_data_file(path: Union[str, Path]) -> Any:
    """Read and parse a YAML or JSON file.

    Files ending in `.json` are parsed as JSON; anything else as YAML.

    Raises:
        DataLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(f"cannot read file ({e})", source=path) from e

    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DataLoadError(f"cannot parse file ({e})", source=path) from e


def parse_timestamp(value: Any, field_name: str, source: Optional[str] = None) -> datetime:
    """Convert a file value to an aware UTC datetime.

    Accepts datetimes (as produced by the YAML loader), dates (taken as
    midnight) and ISO-8601 strings, with or without a trailing `Z`.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return to_utc(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return to_utc(datetime.fromisoformat(text))
        except ValueError as e:
            raise DataLoadError(
                f"invalid timestamp for '{field_name}': {value!r}", source=source
            ) from e
    raise DataLoadError(
        f"invalid timestamp for '{field_name}': {value!r}", source=source
    )


def _require(record: dict, *keys: str, source: Optional[str] = None) -> Any:
    """Return the value of the first key present in a record."""
    for key in keys:
        if key in record:
            return record[key]
    raise DataLoadError(f"missing field '{keys[0]}'", source=source)


def _parse_cycle(raw: Any, source: Optional[str]) -> dict[int, DutyType]:
    if not isinstance(raw, dict):
        raise DataLoadError("'days' must be a mapping of day offset to duty", source=source)

    cycle = {}
    for key, tag in raw.items():
        if isinstance(key, bool):
            raise DataLoadError(f"day offset must be an integer, got {key!r}", source=source)
        try:
            offset = int(key)
        except (TypeError, ValueError) as e:
            raise DataLoadError(
                f"day offset must be an integer, got {key!r}", source=source
            ) from e
        if isinstance(key, float) and key != offset:
            raise DataLoadError(f"day offset must be an integer, got {key!r}", source=source)
        if offset in cycle:
            raise DataLoadError(f"day offset {offset} is defined twice", source=source)
        try:
            cycle[offset] = DutyType.from_tag(tag)
        except ValueError as e:
            raise DataLoadError(str(e), source=source) from e
    return cycle


def _parse_person(value: Any, field_name: str, source: Optional[str]) -> str:
    """Return a person identifier, rejecting null or blank names."""
    if value is None or not str(value).strip():
        raise DataLoadError(f"'{field_name}' contains an empty person name", source=source)
    return str(value)


def _parse_members(raw: Any, source: Optional[str]) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DataLoadError("'soldiers' must be a list", source=source)

    members = [_parse_person(m, "soldiers", source) for m in raw]
    seen = set()
    for member in members:
        if member in seen:
            raise DataLoadError(f"member '{member}' is listed twice", source=source)
        seen.add(member)
    return tuple(members)


def parse_schedule(record: Any, source: Optional[str] = None) -> RotationSchedule:
    """Build a RotationSchedule from a parsed schedule record.

    Args:
        record: Mapping with name, start, days/cycle and soldiers/members.
        source: Where the record came from, used in error messages.
    """
    if not isinstance(record, dict):
        raise DataLoadError("schedule file must contain a mapping", source=source)

    name = _require(record, "name", source=source)
    if not isinstance(name, str) or not name.strip():
        raise DataLoadError("'name' must be a non-empty string", source=source)

    return RotationSchedule(
        name=name,
        start=parse_timestamp(_require(record, "start", source=source), "start", source),
        cycle=_parse_cycle(_require(record, "days", "cycle", source=source), source),
        members=_parse_members(_require(record, "soldiers", "members", source=source), source),
    )


def load_schedule_file(path: Union[str, Path]) -> RotationSchedule:
    """Load a single rotation schedule file."""
    logger.info("Reading schedule file: %s", path)
    return parse_schedule(read_data_file(path), source=str(path))


def load_schedules(directory: Union[str, Path]) -> list[RotationSchedule]:
    """Load every schedule file in a directory, ordered by file name.

    Raises:
        DataLoadError: If the directory is missing, holds no schedule
            files, any file is malformed, or two schedules share a name.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DataLoadError("schedule directory not found", source=directory)

    paths = sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in SCHEDULE_SUFFIXES
    )
    if not paths:
        raise DataLoadError("no schedule files found", source=directory)

    schedules = []
    names = {}
    for path in paths:
        schedule = load_schedule_file(path)
        if schedule.name in names:
            raise DataLoadError(
                f"schedule name '{schedule.name}' is also used by {names[schedule.name]}",
                source=path,
            )
        names[schedule.name] = path.name
        schedules.append(schedule)

    logger.info("Loaded %d schedules from %s", len(schedules), directory)
    return schedules


def parse_absence(record: Any, source: Optional[str] = None) -> AbsenceInterval:
    """Build an AbsenceInterval from a parsed absence record.

    Raises:
        DataLoadError: If a field is missing or malformed.
        IntervalConfigError: If the absence does not end after it starts.
    """
    if not isinstance(record, dict):
        raise DataLoadError("absence entry must be a mapping", source=source)

    reason = record.get("reason")
    return AbsenceInterval(
        person=_parse_person(
            _require(record, "name", "person", source=source), "name", source
        ),
        start=parse_timestamp(_require(record, "from", "start", source=source), "from", source),
        end=parse_timestamp(_require(record, "to", "end", source=source), "to", source),
        reason=str(reason) if reason is not None else None,
    )


def load_absences(
    source: Union[str, Path, Iterable[dict]],
) -> list[AbsenceInterval]:
    """Load absence intervals from a file or from already-parsed records.

    An empty file yields no absences.
    """
    if isinstance(source, (str, Path)):
        logger.info("Reading absence file: %s", source)
        records = read_data_file(source)
        label = str(source)
    else:
        records = source
        label = None

    if records is None:
        return []
    if isinstance(records, (dict, str, bytes)) or not isinstance(records, Iterable):
        raise DataLoadError("absence data must be a list", source=label)

    return [parse_absence(record, source=label) for record in records]
