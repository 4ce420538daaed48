import json

import pytest

import client


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        client.main(["--version"])

    assert excinfo.value.code == 0
    assert client.APP_VERSION in capsys.readouterr().out


def test_main_logs_in_and_prints_payload(monkeypatch, httpx_mock, capsys) -> None:
    monkeypatch.setenv("HR_API_BASE_URL", "https://hr.example.com")
    monkeypatch.setenv("HR_API_USERNAME", "jane")
    monkeypatch.setenv("HR_API_PASSWORD", "secret")
    httpx_mock.add_response(
        url="https://hr.example.com/v1/api/Auth/Login",
        method="POST",
        json={"token": "access-1", "refreshToken": "refresh-1"},
    )
    httpx_mock.add_response(
        url="https://hr.example.com/v1/api/Employees",
        method="GET",
        match_headers={"Authorization": "Bearer access-1"},
        json=[{"id": 1, "name": "Jane"}],
    )

    exit_code = client.main(["get", "/v1/api/Employees"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == [{"id": 1, "name": "Jane"}]


def test_main_reports_normalized_error(monkeypatch, httpx_mock, capsys) -> None:
    monkeypatch.setenv("HR_API_BASE_URL", "https://hr.example.com")
    httpx_mock.add_response(
        url="https://hr.example.com/v1/api/Employees",
        method="POST",
        status_code=400,
        json={"title": "Bad Request", "errors": {"Name": ["required"]}},
    )

    exit_code = client.main(["post", "/v1/api/Employees", "--body", '{"name": ""}'])

    assert exit_code == 1
    assert json.loads(capsys.readouterr().err) == {
        "status": 400,
        "title": "Bad Request",
        "messages": ["required"],
    }
