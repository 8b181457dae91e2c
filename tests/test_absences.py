from datetime import date

from ponto.services.absences import (
    ABSENCE_CATALOGUE,
    HOLIDAY,
    AbsenceType,
    build_day_classifications,
    classification_info,
    debits_balance,
)


def test_catalogue_covers_every_absence_type():
    assert set(ABSENCE_CATALOGUE) == set(AbsenceType)


def test_only_unjustified_and_suspension_debit():
    debiting = {t for t, info in ABSENCE_CATALOGUE.items() if info.debits_balance}
    assert debiting == {AbsenceType.UNJUSTIFIED_ABSENCE, AbsenceType.PUNITIVE_SUSPENSION}
    assert debits_balance("unjustified_absence") is True
    assert debits_balance(HOLIDAY) is False
    assert debits_balance(None) is False
    assert debits_balance("not_a_type") is False


def test_labels():
    assert classification_info("unjustified_absence").label == "Falta"
    assert classification_info("vacation").label == "Férias"
    assert classification_info(HOLIDAY).label == "Feriado"
    assert classification_info("unknown") is None


def test_ranges_are_expanded_and_clipped_to_period():
    result = build_day_classifications(
        [(date(2024, 2, 27), date(2024, 3, 2), "vacation")],
        [],
        date(2024, 3, 1),
        date(2024, 3, 31),
    )
    assert result == {date(2024, 3, 1): "vacation", date(2024, 3, 2): "vacation"}


def test_holiday_never_overrides_an_absence():
    result = build_day_classifications(
        [(date(2024, 3, 4), date(2024, 3, 4), AbsenceType.UNJUSTIFIED_ABSENCE)],
        [date(2024, 3, 4), date(2024, 3, 5)],
        date(2024, 3, 1),
        date(2024, 3, 31),
    )
    assert result[date(2024, 3, 4)] == "unjustified_absence"
    assert result[date(2024, 3, 5)] == HOLIDAY


def test_first_recorded_absence_wins_on_overlap():
    result = build_day_classifications(
        [
            (date(2024, 3, 4), date(2024, 3, 8), "vacation"),
            (date(2024, 3, 6), date(2024, 3, 6), "medical_leave"),
        ],
        [],
        date(2024, 3, 1),
        date(2024, 3, 31),
    )
    assert result[date(2024, 3, 6)] == "vacation"


def test_holidays_outside_period_are_ignored():
    result = build_day_classifications([], [date(2024, 4, 21)], date(2024, 3, 1), date(2024, 3, 31))
    assert result == {}
