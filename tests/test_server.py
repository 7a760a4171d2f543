import http.client
import json
import threading
from http.server import ThreadingHTTPServer

import pytest

from bountyboard.address import address_from_seed
from bountyboard.server import BountyApp, Response, main, make_handler


@pytest.fixture
def app():
    return BountyApp()


def _send(app, method, path, payload=None, headers=None):
    body = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return app.handle(method, path, headers or {}, body)


def _admin_headers(app):
    return {"X-Wallet-Address": app.ledger.admin_address}


def _create(app, **fields):
    payload = {"title": "Test Task", "description": "Test Description", "bounty": "1000000"}
    payload.update(fields)
    response = _send(app, "POST", "/tasks", payload)
    assert response.status == 200
    return response.json()


def test_addresses_include_admin(app):
    response = _send(app, "GET", "/addresses")
    assert response.status == 200
    data = response.json()
    assert data["admin_address"] == app.ledger.admin_address
    assert data["admin_address"] in data["all_addresses"]


def test_generate_address_is_listed(app):
    response = _send(app, "POST", "/generate-address", {"seed": "user-1"})
    assert response.status == 200
    address = response.json()["address"]
    assert address == address_from_seed("user-1")
    listed = _send(app, "GET", "/addresses").json()["all_addresses"]
    assert address in listed


def test_generate_address_rejects_bad_json(app):
    response = app.handle("POST", "/generate-address", {}, b"{not json")
    assert response.status == 400


def test_generate_address_rejects_non_string_seed(app):
    response = _send(app, "POST", "/generate-address", {"seed": 5})
    assert response.status == 400


def test_create_task_sets_id_and_status(app):
    task = _create(app)
    assert task["id"].startswith("task-")
    assert task["id"][len("task-"):].isdigit()
    assert task["status"] == "OPEN"
    assert "claimer" not in task
    assert task["id"] in app.tasks
    listed = _send(app, "GET", "/tasks").json()
    assert [t["id"] for t in listed] == [task["id"]]


def test_create_task_overrides_client_status(app):
    task = _create(app, status="COMPLETED", id="chosen")
    assert task["status"] == "OPEN"
    assert task["id"] != "chosen"


def test_create_task_missing_title_fails(app):
    response = _send(app, "POST", "/tasks", {"bounty": "10"})
    assert response.status == 500
    assert response.text == "invalid task parameters\n"


def test_create_task_rejects_non_string_field(app):
    response = _send(app, "POST", "/tasks", {"title": "t", "bounty": 10})
    assert response.status == 400


def test_create_task_rejects_empty_body(app):
    response = app.handle("POST", "/tasks", {}, b"")
    assert response.status == 400


def test_list_tasks_empty(app):
    response = _send(app, "GET", "/tasks")
    assert response.status == 200
    assert response.json() == []
    assert response.headers["Content-Type"] == "application/json"


def test_claim_task(app):
    task = _create(app)
    response = _send(
        app, "PUT", f"/tasks/{task['id']}/claim", {"claimer": "someone", "proof": "done"}
    )
    assert response.status == 200
    claimed = response.json()
    assert claimed["status"] == "CLAIMED"
    assert claimed["claimer"] == "someone"
    assert claimed["proof"] == "done"


def test_claim_task_twice_fails(app):
    task = _create(app)
    path = f"/tasks/{task['id']}/claim"
    _send(app, "PUT", path, {"claimer": "a", "proof": "p"})
    response = _send(app, "PUT", path, {"claimer": "b", "proof": "q"})
    assert response.status == 500
    assert response.text == "task is not open for claiming\n"


def test_claim_unknown_task(app):
    response = _send(app, "PUT", "/tasks/missing/claim", {"claimer": "a", "proof": "p"})
    assert response.status == 500
    assert response.text == "task not found\n"


def test_claim_short_path(app):
    response = _send(app, "PUT", "/claim", {"claimer": "a"})
    assert response.status == 400
    assert response.text == "Invalid URL format\n"


def test_approve_requires_admin(app):
    task = _create(app)
    response = _send(app, "PUT", f"/admin/tasks/{task['id']}", headers={"X-Wallet-Address": "nobody"})
    assert response.status == 401
    assert response.text == "Unauthorized - Admin access required\n"


def test_approve_claimed_task(app):
    task = _create(app)
    _send(app, "PUT", f"/tasks/{task['id']}/claim", {"claimer": "c", "proof": "p"})
    response = _send(app, "PUT", f"/admin/tasks/{task['id']}", headers=_admin_headers(app))
    assert response.status == 200
    assert response.json()["status"] == "COMPLETED"
    assert app.ledger.get_task(task["id"]).status == "COMPLETED"


def test_approve_header_is_case_insensitive(app):
    task = _create(app)
    _send(app, "PUT", f"/tasks/{task['id']}/claim", {"claimer": "c", "proof": "p"})
    headers = {"x-wallet-address": app.ledger.admin_address}
    response = _send(app, "PUT", f"/admin/tasks/{task['id']}", headers=headers)
    assert response.status == 200


def test_approve_unknown_task(app):
    response = _send(app, "PUT", "/admin/tasks/missing", headers=_admin_headers(app))
    assert response.status == 404
    assert response.text == "Task not found\n"


def test_approve_open_task_fails(app):
    task = _create(app)
    response = _send(app, "PUT", f"/admin/tasks/{task['id']}", headers=_admin_headers(app))
    assert response.status == 500
    assert response.text == "task must be claimed before approval\n"


def test_add_admin_requires_admin(app):
    response = _send(app, "POST", "/admin/admins", {"address": "x"}, {"X-Wallet-Address": "x"})
    assert response.status == 401
    assert not app.ledger.is_admin("x")


def test_added_admin_can_approve(app):
    response = _send(app, "POST", "/admin/admins", {"address": "helper"}, _admin_headers(app))
    assert response.status == 200
    assert response.json() == {"message": "Admin added successfully"}
    task = _create(app)
    _send(app, "PUT", f"/tasks/{task['id']}/claim", {"claimer": "c", "proof": "p"})
    approved = _send(app, "PUT", f"/admin/tasks/{task['id']}", headers={"X-Wallet-Address": "helper"})
    assert approved.json()["status"] == "COMPLETED"


@pytest.mark.parametrize(
    "method,path", [("DELETE", "/tasks"), ("GET", "/nowhere"), ("GET", "/admin/admins")]
)
def test_unknown_routes(app, method, path):
    response = app.handle(method, path)
    assert response.status == 404
    assert response.text == "404 page not found\n"


def test_query_string_ignored(app):
    response = _send(app, "GET", "/tasks?limit=5")
    assert response.status == 200
    assert response.json() == []


def test_response_error_is_plain_text():
    response = Response.error("boom", 500)
    assert response.text == "boom\n"
    assert response.headers["Content-Type"].startswith("text/plain")


def test_round_trip_over_http(app):
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), make_handler(app))
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        conn = http.client.HTTPConnection("127.0.0.1", httpd.server_address[1], timeout=5)
        payload = json.dumps({"title": "t", "bounty": "5"})
        conn.request("POST", "/tasks", body=payload, headers={"Content-Type": "application/json"})
        created = conn.getresponse()
        created_task = json.loads(created.read())
        assert created.status == 200
        conn.request("GET", "/tasks")
        listed = conn.getresponse()
        assert listed.status == 200
        assert json.loads(listed.read()) == [created_task]
        conn.close()
    finally:
        httpd.shutdown()
        httpd.server_close()


def test_main_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "--port" in capsys.readouterr().out