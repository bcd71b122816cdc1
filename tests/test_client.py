"""Command line client against a mocked transport."""

import json

import httpx

from status_service.client import StatusClient, main

BASE = "http://status.test/api"


def _transport(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_submit_posts_status_and_prints_id(capsys):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json="42")

    code = main(["--base-url", BASE, "submit", "300", "--change-date", "2024-01-01T00:00:00Z"], client=_transport(handler))

    assert code == 0
    assert capsys.readouterr().out.strip() == "42"
    assert seen == {
        "method": "POST",
        "url": f"{BASE}/status",
        "body": {"status": 300, "changeDate": "2024-01-01T00:00:00Z"},
    }


def test_list_passes_date_filter(capsys):
    records = [{"id": 2, "status": 100, "changeDate": "2024-02-01T00:00:00Z"}]

    def handler(request):
        assert request.url.params["dateFrom"] == "2024-01-01T00:00:00Z"
        return httpx.Response(200, json=records)

    code = main(["--base-url", BASE, "list", "--date-from", "2024-01-01T00:00:00Z"], client=_transport(handler))

    assert code == 0
    assert json.loads(capsys.readouterr().out) == records


def test_current_unwraps_single_record():
    record = {"id": 5, "status": 200, "changeDate": "2024-02-01T00:00:00Z"}
    client = StatusClient(BASE, client=_transport(lambda request: httpx.Response(200, json=[record])))

    assert client.current() == record


def test_error_responses_exit_non_zero(capsys):
    def handler(request):
        return httpx.Response(503, text="503 - Over Quota")

    code = main(["--base-url", BASE, "current"], client=_transport(handler))

    assert code == 1
    assert "503 - Over Quota" in capsys.readouterr().err
