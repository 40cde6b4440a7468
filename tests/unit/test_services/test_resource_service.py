"""Tests for resource CRUD services."""

import asyncio

import pytest


def make_api(backend):
    from schoolsync.services.api_client import ApiClient

    return ApiClient("http://api.test", transport=backend.transport)


def test_unknown_resource_rejected():
    from schoolsync.services.resource_service import ResourceService
    from tests.fakes.fake_backend import FakeBackend

    with pytest.raises(ValueError):
        ResourceService(make_api(FakeBackend()), "parents")


def test_list_unwraps_envelope():
    from schoolsync.services.resource_service import ResourceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("GET", "/api/subjects", {"success": True, "data": [{"id": 1, "name": "Maths"}]})

    subjects = asyncio.run(ResourceService(make_api(backend), "subjects").list())

    assert subjects == [{"id": 1, "name": "Maths"}]


def test_list_unexpected_shape_is_empty():
    from schoolsync.services.resource_service import ResourceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("GET", "/api/teachers", {"success": True})

    assert asyncio.run(ResourceService(make_api(backend), "teachers").list()) == []


def test_scratch_card_paths():
    from schoolsync.services.resource_service import ResourceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("DELETE", "/api/scratch-cards/abc", status=204)
    backend.route("GET", "/api/scratch-cards/abc", {"data": {"id": "abc", "pin": "1234"}})

    service = ResourceService(make_api(backend), "scratch-cards")

    assert asyncio.run(service.get("abc")) == {"id": "abc", "pin": "1234"}
    asyncio.run(service.delete("abc"))
    assert backend.requests[-1].method == "DELETE"


def test_student_create_encodes_payload_and_normalizes_result():
    from schoolsync.services.resource_service import StudentService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route(
        "POST",
        "/api/students",
        {"success": True, "data": {"id": 9, "name": "Ada", "gender": False}},
    )

    created = asyncio.run(
        StudentService(make_api(backend)).save({"name": "Ada", "gender": "Female"})
    )

    body = backend.sent_json()
    assert body["gender"] is False
    assert body["guardians"] == []
    assert created["gender"] == "Female"
    assert created["uid"] == 9


def test_student_save_with_id_uses_put():
    from schoolsync.services.resource_service import StudentService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("PUT", "/api/students/4", {"id": 4, "name": "Ben", "gender": True})

    saved = asyncio.run(StudentService(make_api(backend)).save({"id": 4, "name": "Ben", "gender": "Male"}))

    assert backend.requests[-1].method == "PUT"
    assert backend.sent_json()["gender"] is True
    assert saved["gender"] == "Male"


def test_backend_error_propagates():
    from schoolsync.core.errors import ApiError
    from schoolsync.services.resource_service import ResourceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("POST", "/api/results", "duplicate result", status=409)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(ResourceService(make_api(backend), "results").create({"studentId": 1}))

    assert exc_info.value.status_code == 409


def test_student_list_all_retries_and_normalizes():
    import httpx

    from schoolsync.services.api_client import ApiClient
    from schoolsync.services.resource_service import StudentService

    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(504, text="timeout")
        return httpx.Response(200, json={"students": [{"id": 1, "gender": True}, None]})

    api = ApiClient("http://api.test", transport=httpx.MockTransport(handler))
    service = StudentService(api, retry_attempts=3, retry_backoff=0)

    students = asyncio.run(service.list_all())

    assert len(calls) == 2
    assert len(students) == 1
    assert students[0]["gender"] == "Male"
    assert students[0]["uid"] == 1


def test_attendance_history_filters_by_day():
    from schoolsync.services.resource_service import AttendanceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("GET", "/api/attendance/S-1", [{"status": "present", "date": "2024-03-01"}])

    service = AttendanceService(make_api(backend))

    assert asyncio.run(service.is_present("S-1", "2024-03-01")) is True
    assert backend.requests[-1].url.params["date"] == "2024-03-01"


def test_attendance_history_missing_is_empty():
    from schoolsync.services.resource_service import AttendanceService
    from tests.fakes.fake_backend import FakeBackend

    service = AttendanceService(make_api(FakeBackend()))

    assert asyncio.run(service.history("S-9", "2024-03-01")) == []
    assert asyncio.run(service.is_present("S-9", "2024-03-01")) is False


def test_attendance_mark_posts_status_and_date():
    from schoolsync.services.resource_service import AttendanceService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("POST", "/api/attendance/mark/S-1", {"success": True, "data": {"id": "a1"}})

    service = AttendanceService(make_api(backend))

    assert asyncio.run(service.mark("S-1", "absent", "2024-03-01")) == {"id": "a1"}
    assert backend.sent_json() == {"status": "absent", "date": "2024-03-01"}

    with pytest.raises(ValueError):
        asyncio.run(service.mark("S-1", "late"))


def test_scratch_card_generate():
    from schoolsync.services.resource_service import ScratchCardService
    from tests.fakes.fake_backend import FakeBackend

    backend = FakeBackend()
    backend.route("POST", "/api/scratch-cards/generate", [{"id": "c1"}, {"id": "c2"}])

    service = ScratchCardService(make_api(backend))

    assert asyncio.run(service.generate(2)) == [{"id": "c1"}, {"id": "c2"}]
    assert backend.sent_json() == {"quantity": 2}

    for quantity in (0, -3, "5", True):
        with pytest.raises(ValueError):
            asyncio.run(service.generate(quantity))
    assert len(backend.requests) == 1
