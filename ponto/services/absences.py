"""
Absence catalogue and per-day classification.

Every date in a period maps to at most one classification: an absence type
(vacation included) or "holiday". Absences are applied first; holidays only
fill dates that are still unclassified.
"""
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, NamedTuple, Optional, Tuple


class AbsenceType(str, Enum):
    VACATION = "vacation"
    MEDICAL_LEAVE = "medical_leave"
    MEDICAL_CONSULTATION = "medical_consultation"
    JUSTIFIED_ABSENCE = "justified_absence"
    MATERNITY_LEAVE = "maternity_leave"
    PATERNITY_LEAVE = "paternity_leave"
    UNJUSTIFIED_ABSENCE = "unjustified_absence"
    WORK_ACCIDENT = "work_accident"
    PUNITIVE_SUSPENSION = "punitive_suspension"
    DAY_OFF = "day_off"
    BEREAVEMENT_LEAVE = "bereavement_leave"


HOLIDAY = "holiday"


class AbsenceInfo(NamedTuple):
    label: str
    color: str
    debits_balance: bool


ABSENCE_CATALOGUE: Dict[AbsenceType, AbsenceInfo] = {
    AbsenceType.VACATION: AbsenceInfo("Férias", "bg-primary", False),
    AbsenceType.MEDICAL_LEAVE: AbsenceInfo("Licença Médica", "bg-destructive", False),
    AbsenceType.MEDICAL_CONSULTATION: AbsenceInfo("Consulta Médica", "bg-orange-500", False),
    AbsenceType.JUSTIFIED_ABSENCE: AbsenceInfo("Ausência Justificada", "bg-warning", False),
    AbsenceType.MATERNITY_LEAVE: AbsenceInfo("Licença Maternidade", "bg-pink-500", False),
    AbsenceType.PATERNITY_LEAVE: AbsenceInfo("Licença Paternidade", "bg-sky-500", False),
    AbsenceType.UNJUSTIFIED_ABSENCE: AbsenceInfo("Falta", "bg-red-700", True),
    AbsenceType.WORK_ACCIDENT: AbsenceInfo("Acidente de Trabalho", "bg-amber-600", False),
    AbsenceType.PUNITIVE_SUSPENSION: AbsenceInfo("Suspensão", "bg-gray-700", True),
    AbsenceType.DAY_OFF: AbsenceInfo("Folga", "bg-teal-500", False),
    AbsenceType.BEREAVEMENT_LEAVE: AbsenceInfo("Falecimento Familiar", "bg-violet-600", False),
}

HOLIDAY_INFO = AbsenceInfo("Feriado", "bg-blue-500", False)
DEFAULT_COLOR = "bg-muted-foreground"


def classification_info(classification: Optional[str]) -> Optional[AbsenceInfo]:
    if classification is None:
        return None
    if classification == HOLIDAY:
        return HOLIDAY_INFO
    try:
        return ABSENCE_CATALOGUE[AbsenceType(classification)]
    except ValueError:
        return None


def debits_balance(classification: Optional[str]) -> bool:
    """True for classifications that charge the full expected day."""
    info = classification_info(classification)
    return bool(info and info.debits_balance)


def _each_day(start: date, end: date):
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def build_day_classifications(
    absences: Iterable[Tuple[date, date, str]],
    holidays: Iterable[date],
    period_start: date,
    period_end: date,
) -> Dict[date, str]:
    """
    Map each date in [period_start, period_end] to its classification.

    Args:
        absences: (start_date, end_date, absence_type) ranges, inclusive
        holidays: holiday dates
        period_start: first date of interest
        period_end: last date of interest

    Returns:
        {date: classification} for classified dates only
    """
    result: Dict[date, str] = {}
    for start, end, absence_type in absences:
        value = absence_type.value if isinstance(absence_type, AbsenceType) else str(absence_type)
        for day in _each_day(max(start, period_start), min(end, period_end)):
            result.setdefault(day, value)
    for day in holidays:
        if period_start <= day <= period_end:
            result.setdefault(day, HOLIDAY)
    return result
