from datetime import date

from playschool.services.session import Session, end_of_month, session_for


def test_february_belongs_to_previous_session():
    session = session_for(date(2024, 2, 15))
    assert session.start == date(2023, 4, 1)
    assert session.end == date(2024, 3, 31)
    assert session.label == "2023-2024"


def test_june_starts_new_session():
    session = session_for(date(2024, 6, 1))
    assert session.start == date(2024, 4, 1)
    assert session.end == date(2025, 3, 31)


def test_session_boundaries():
    assert session_for(date(2024, 4, 1)) == Session(2024)
    assert session_for(date(2024, 3, 31)) == Session(2023)


def test_contains():
    session = Session(2024)
    assert session.contains(date(2024, 4, 1))
    assert session.contains(date(2025, 3, 31))
    assert not session.contains(date(2025, 4, 1))
    assert not session.contains(date(2024, 3, 31))


def test_end_of_month():
    assert end_of_month(date(2024, 2, 3)) == date(2024, 2, 29)
    assert end_of_month(date(2023, 2, 3)) == date(2023, 2, 28)
    assert end_of_month(date(2024, 4, 15)) == date(2024, 4, 30)
