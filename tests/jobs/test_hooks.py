from src.timeclock.timeclock.jobs import hooks
from src.timeclock.timeclock.jobs.hooks import HttpPunchInHook, NullPunchInHook, build_punch_in_hook

from tests.fakes import utc


class _Response:
    def __init__(self):
        self.checked = False

    def raise_for_status(self):
        self.checked = True


def test_build_without_url_gives_null_hook():
    assert isinstance(build_punch_in_hook(None), NullPunchInHook)
    assert isinstance(build_punch_in_hook("https://hooks.example.test/temp"), HttpPunchInHook)


def test_http_hook_posts_employee_and_timestamp(monkeypatch):
    calls = []
    response = _Response()

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return response

    monkeypatch.setattr(hooks.requests, "post", fake_post)

    HttpPunchInHook("https://hooks.example.test/temp", timeout=3, token="s3cret").trigger(
        employee_id="e1", timestamp=utc(2024, 5, 6, 9, 0)
    )

    [(url, kwargs)] = calls
    assert url == "https://hooks.example.test/temp"
    assert kwargs["json"] == {"employee_id": "e1", "timestamp": "2024-05-06T09:00:00+00:00"}
    assert kwargs["headers"]["Authorization"] == "Bearer s3cret"
    assert kwargs["timeout"] == 3.0
    assert response.checked is True
