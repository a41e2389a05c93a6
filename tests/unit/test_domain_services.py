import pytest

from days.core.exceptions import ForbiddenError, NotFoundError, ValidationAppError
from days.domain.entities import Calendar, CalendarEntry, ColorSetting, User
from days.domain.exceptions import AlreadyExistsError
from days.domain.services import CalendarDomainService, UserDomainService
from days.domain.value_objects import CalendarDate, Email, HexColor, Identifier
from tests.fakes import build_repositories


async def _seed():
    repos = build_repositories()
    owner = User.create(Email.parse("owner@example.com"), "owner", "salt:hash")
    stranger = User.create(Email.parse("stranger@example.com"), "stranger", "salt:hash")
    await repos.users.save(owner)
    await repos.users.save(stranger)

    calendar = Calendar.create(owner.id, "Mood")
    other_calendar = Calendar.create(owner.id, "Sleep")
    await repos.calendars.save(calendar)
    await repos.calendars.save(other_calendar)

    good = ColorSetting.create(owner.id, calendar.id, "Good", HexColor.parse("#0f0"))
    elsewhere = ColorSetting.create(owner.id, other_calendar.id, "Rested", HexColor.parse("#00f"))
    await repos.color_settings.save(good)
    await repos.color_settings.save(elsewhere)

    rules = CalendarDomainService(repos.users, repos.calendars, repos.color_settings, repos.entries)
    return repos, rules, owner, stranger, calendar, good, elsewhere


@pytest.mark.asyncio
async def test_unique_constraints_detect_email_then_username_and_honor_exclusion():
    repos = build_repositories()
    user = User.create(Email.parse("taken@example.com"), "taken", "salt:hash")
    await repos.users.save(user)
    rules = UserDomainService(repos.users)

    with pytest.raises(AlreadyExistsError) as email_exc:
        await rules.validate_unique_constraints(Email.parse("TAKEN@example.com"), "fresh")
    assert email_exc.value.details == {"field": "email"}

    with pytest.raises(AlreadyExistsError) as username_exc:
        await rules.validate_unique_constraints(Email.parse("fresh@example.com"), "taken")
    assert username_exc.value.details == {"field": "username"}

    await rules.validate_unique_constraints(user.email, user.username, exclude_user_id=user.id)


@pytest.mark.asyncio
async def test_validate_user_exists():
    repos = build_repositories()
    rules = UserDomainService(repos.users)
    with pytest.raises(NotFoundError):
        await rules.validate_user_exists(None)
    with pytest.raises(NotFoundError):
        await rules.validate_user_exists(Identifier.generate())


@pytest.mark.asyncio
async def test_calendar_ownership_distinguishes_missing_and_foreign():
    _, rules, owner, stranger, calendar, _, _ = await _seed()

    assert (await rules.validate_calendar_ownership(owner.id, calendar.id)).id == calendar.id
    with pytest.raises(ForbiddenError):
        await rules.validate_calendar_ownership(stranger.id, calendar.id)
    with pytest.raises(NotFoundError):
        await rules.validate_calendar_ownership(owner.id, Identifier.generate())


@pytest.mark.asyncio
async def test_calendar_names_conflict_case_insensitively():
    _, rules, owner, stranger, calendar, _, _ = await _seed()

    with pytest.raises(AlreadyExistsError):
        await rules.validate_calendar_name_unique(owner.id, "MOOD")
    await rules.validate_calendar_name_unique(owner.id, "mood", exclude_calendar_id=calendar.id)
    await rules.validate_calendar_name_unique(stranger.id, "Mood")


@pytest.mark.asyncio
async def test_color_setting_uniqueness_is_scoped_to_calendar():
    _, rules, _, _, calendar, good, elsewhere = await _seed()

    with pytest.raises(AlreadyExistsError) as color_exc:
        await rules.validate_color_setting_unique(calendar.id, "Another", HexColor.parse("#00FF00"))
    assert color_exc.value.details == {"field": "hex_color"}

    with pytest.raises(AlreadyExistsError) as name_exc:
        await rules.validate_color_setting_unique(calendar.id, "good", HexColor.parse("#123456"))
    assert name_exc.value.details == {"field": "name"}

    await rules.validate_color_setting_unique(calendar.id, "Good", good.hex_color, exclude_setting_id=good.id)
    await rules.validate_color_setting_unique(elsewhere.calendar_id, "Good", good.hex_color)


@pytest.mark.asyncio
async def test_entry_constraints_check_references_in_order():
    repos, rules, owner, stranger, calendar, good, elsewhere = await _seed()
    date = CalendarDate.parse("2024-01-15")

    with pytest.raises(NotFoundError):
        await rules.validate_calendar_entry_constraints(Identifier.generate(), calendar.id, date, good.id)
    with pytest.raises(ForbiddenError):
        await rules.validate_calendar_entry_constraints(stranger.id, calendar.id, date, good.id)
    with pytest.raises(NotFoundError):
        await rules.validate_calendar_entry_constraints(owner.id, calendar.id, date, Identifier.generate())
    with pytest.raises(ValidationAppError):
        await rules.validate_calendar_entry_constraints(owner.id, calendar.id, date, elsewhere.id)

    resolved = await rules.validate_calendar_entry_constraints(owner.id, calendar.id, date, good.id)
    assert resolved.id == good.id

    entry = CalendarEntry.create(owner.id, calendar.id, date, good.id)
    await repos.entries.save(entry)
    with pytest.raises(AlreadyExistsError):
        await rules.validate_calendar_entry_constraints(owner.id, calendar.id, date, good.id)
    await rules.validate_calendar_entry_constraints(owner.id, calendar.id, date, good.id, exclude_entry_id=entry.id)


@pytest.mark.asyncio
async def test_foreign_color_setting_and_entry_are_forbidden():
    repos, rules, owner, stranger, calendar, good, _ = await _seed()
    entry = CalendarEntry.create(owner.id, calendar.id, CalendarDate.parse("2024-01-01"), good.id)
    await repos.entries.save(entry)

    with pytest.raises(ForbiddenError):
        await rules.validate_color_setting_ownership(stranger.id, good.id)
    with pytest.raises(ForbiddenError):
        await rules.validate_calendar_entry_ownership(stranger.id, entry.id)
    with pytest.raises(NotFoundError):
        await rules.validate_calendar_entry_ownership(owner.id, Identifier.generate())
    assert (await rules.validate_calendar_entry_ownership(owner.id, entry.id)).id == entry.id
