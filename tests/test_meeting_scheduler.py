"""
Tests for the meeting scheduler.
"""

import pytest

from meetingfinder.domain.meeting_scheduler import MeetingScheduler
from meetingfinder.domain.models import (
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeSpan,
    minutes_of_day,
)

PERSON_A = "Person A"
PERSON_B = "Person B"
PERSON_C = "Person C"

TIME_0800AM = minutes_of_day(8, 0)
TIME_0830AM = minutes_of_day(8, 30)
TIME_0900AM = minutes_of_day(9, 0)
TIME_0930AM = minutes_of_day(9, 30)
TIME_1000AM = minutes_of_day(10, 0)
TIME_1100AM = minutes_of_day(11, 0)

DURATION_15_MINUTES = 15
DURATION_30_MINUTES = 30
DURATION_60_MINUTES = 60
DURATION_90_MINUTES = 90
DURATION_2_HOURS = 120


def until_end_of_day(start: int) -> TimeSpan:
    return TimeSpan.from_start_end(start, END_OF_DAY, inclusive=True)


@pytest.fixture
def scheduler():
    return MeetingScheduler()


class TestMandatoryAttendees:
    """Scheduling with mandatory attendees only."""

    def test_options_for_no_attendees(self, scheduler):
        """Without attendees the whole day is available."""
        request = MeetingRequest(duration=DURATION_60_MINUTES)

        assert scheduler.query([], request) == [WHOLE_DAY]

    def test_no_options_for_too_long_of_a_request(self, scheduler):
        """A request longer than the day yields no slot."""
        request = MeetingRequest(attendees=[PERSON_A], duration=WHOLE_DAY.duration + 1)

        assert scheduler.query([], request) == []

    def test_event_splits_restriction(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0830AM, DURATION_30_MINUTES), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM),
            until_end_of_day(TIME_0900AM),
        ]

    def test_every_attendee_is_considered(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0800AM, DURATION_30_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_B]),
        ]
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0800AM),
            TimeSpan.from_start_end(TIME_0830AM, TIME_0900AM),
            until_end_of_day(TIME_0930AM),
        ]

    def test_overlapping_events(self, scheduler):
        """Overlapping events merge their exclusions."""
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0830AM, DURATION_90_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_60_MINUTES), [PERSON_B]),
        ]
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM),
            until_end_of_day(TIME_1000AM),
        ]

    def test_overlapping_events_extending_later(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0830AM, DURATION_60_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_60_MINUTES), [PERSON_B]),
        ]
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM),
            until_end_of_day(TIME_1000AM),
        ]

    def test_nested_events(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0830AM, DURATION_90_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_B]),
        ]
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM),
            until_end_of_day(TIME_1000AM),
        ]

    def test_double_booked_people(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0830AM, DURATION_60_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM),
            until_end_of_day(TIME_0930AM),
        ]

    def test_overlapping_events_at_start_of_day(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0900AM), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_end(TIME_0800AM, TIME_1000AM), [PERSON_B]),
        ]
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [until_end_of_day(TIME_1000AM)]

    def test_just_enough_room(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM), [PERSON_A]),
            Event("Event 2", until_end_of_day(TIME_0900AM), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_duration(TIME_0830AM, DURATION_30_MINUTES),
        ]

    def test_ignores_people_not_attending(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query(events, request) == [WHOLE_DAY]

    def test_no_conflicts(self, scheduler):
        request = MeetingRequest(attendees=[PERSON_A, PERSON_B], duration=DURATION_30_MINUTES)

        assert scheduler.query([], request) == [WHOLE_DAY]

    def test_not_enough_room(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM), [PERSON_A]),
            Event("Event 2", until_end_of_day(TIME_0900AM), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_60_MINUTES)

        assert scheduler.query(events, request) == []


class TestOptionalAttendees:
    """Scheduling that prefers slots suiting optional attendees."""

    def test_optional_attendee_not_available(self, scheduler):
        """An optional attendee busy all day is ignored."""
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0800AM, DURATION_30_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_B]),
            Event("Event 3", WHOLE_DAY, [PERSON_C]),
        ]
        request = MeetingRequest(
            attendees=[PERSON_A, PERSON_B],
            duration=DURATION_30_MINUTES,
            optional_attendees=[PERSON_C],
        )

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0800AM),
            TimeSpan.from_start_end(TIME_0830AM, TIME_0900AM),
            until_end_of_day(TIME_0930AM),
        ]

    def test_optional_attendee_overlaps_one_slot(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_duration(TIME_0800AM, DURATION_30_MINUTES), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0830AM, DURATION_30_MINUTES), [PERSON_C]),
            Event("Event 3", TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES), [PERSON_B]),
        ]
        request = MeetingRequest(
            attendees=[PERSON_A, PERSON_B],
            duration=DURATION_30_MINUTES,
            optional_attendees=[PERSON_C],
        )

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0800AM),
            until_end_of_day(TIME_0930AM),
        ]

    def test_just_enough_room_for_mandatory_only(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0830AM), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0830AM, DURATION_15_MINUTES), [PERSON_B]),
            Event("Event 3", until_end_of_day(TIME_0900AM), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES).with_optional(PERSON_B)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_duration(TIME_0830AM, DURATION_30_MINUTES),
        ]

    def test_only_optionals_all_available(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0900AM), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0930AM, DURATION_30_MINUTES), [PERSON_B]),
            Event("Event 3", until_end_of_day(TIME_1100AM), [PERSON_A]),
        ]
        request = MeetingRequest(duration=DURATION_30_MINUTES).with_optional(PERSON_A, PERSON_B)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_duration(TIME_0900AM, DURATION_30_MINUTES),
            TimeSpan.from_start_duration(TIME_1000AM, DURATION_60_MINUTES),
        ]

    def test_only_optionals_none_available(self, scheduler):
        """With no room for the optionals, the whole day suits the (zero) mandatory attendees."""
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0900AM), [PERSON_A]),
            Event("Event 2", TimeSpan.from_start_duration(TIME_0900AM, DURATION_2_HOURS), [PERSON_B]),
            Event("Event 3", until_end_of_day(TIME_1100AM), [PERSON_A]),
        ]
        request = MeetingRequest(duration=DURATION_30_MINUTES).with_optional(PERSON_A, PERSON_B)

        assert scheduler.query(events, request) == [WHOLE_DAY]

    def test_attendee_both_mandatory_and_optional(self, scheduler):
        """An attendee listed twice counts as mandatory."""
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_0900AM), [PERSON_A]),
        ]
        request = MeetingRequest(
            attendees=[PERSON_A],
            duration=DURATION_30_MINUTES,
            optional_attendees=[PERSON_A],
        )

        assert scheduler.query(events, request) == [until_end_of_day(TIME_0900AM)]


class TestFallbackPolicy:
    """Tests for the choice between both candidate lists."""

    def test_result_is_optional_candidates_when_available(self, scheduler):
        events = [
            Event("Event 1", TimeSpan.from_start_end(START_OF_DAY, TIME_1000AM), [PERSON_C]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES).with_optional(PERSON_C)

        options = scheduler.find_schedules(events, request)

        assert options.mandatory == [WHOLE_DAY]
        assert options.optional == [until_end_of_day(TIME_1000AM)]
        assert options.includes_optional
        assert options.chosen == options.optional
        assert scheduler.query(events, request) == options.optional

    def test_result_is_mandatory_candidates_otherwise(self, scheduler):
        events = [
            Event("Event 1", WHOLE_DAY, [PERSON_C]),
            Event("Event 2", TimeSpan.from_start_end(TIME_0800AM, TIME_0900AM), [PERSON_A]),
        ]
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES).with_optional(PERSON_C)

        options = scheduler.find_schedules(events, request)

        assert options.optional == []
        assert not options.includes_optional
        assert options.chosen == options.mandatory
        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0800AM),
            until_end_of_day(TIME_0900AM),
        ]


class TestQueryInputs:
    """Tests for absent inputs."""

    def test_absent_request_gives_no_result(self, scheduler):
        assert scheduler.query([], None) is None
        assert scheduler.find_schedules([], None) is None

    def test_absent_events_treated_as_empty(self, scheduler):
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_30_MINUTES)

        assert scheduler.query(None, request) == [WHOLE_DAY]

    def test_events_may_be_any_iterable(self, scheduler):
        events = (
            Event(name, TimeSpan.from_start_duration(start, DURATION_30_MINUTES), [PERSON_A])
            for name, start in [("Event 1", TIME_0800AM), ("Event 2", TIME_0900AM)]
        )
        request = MeetingRequest(attendees=[PERSON_A], duration=DURATION_60_MINUTES)

        assert scheduler.query(events, request) == [
            TimeSpan.from_start_end(START_OF_DAY, TIME_0800AM),
            until_end_of_day(TIME_0930AM),
        ]
