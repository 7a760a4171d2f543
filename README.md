# bountyboard

A small HTTP service for task bounties. People post tasks with a bounty,
others claim them with a proof of work, and an admin approves the claim.
Tasks, wallet addresses and admin rights live in an in-memory ledger;
addresses are bech32 account addresses (prefix `cosmos`) derived
deterministically from a seed string.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
bountyboard
bountyboard --host 127.0.0.1 --port 9000
```

`--host` is the address to bind (all interfaces by default) and `--port`
the port to listen on (8080 by default). At start-up the ledger derives
the admin address from the seed `admin-1` and logs it; send that address
in the `X-Wallet-Address` header for admin operations.

## Endpoints

| Method | Path                | What it does                                         |
|--------|---------------------|------------------------------------------------------|
| GET    | `/addresses`        | Admin address and every generated address            |
| POST   | `/generate-address` | Derive and remember an address from `{"seed": "..."}` |
| POST   | `/tasks`            | Create a task (`title` and `bounty` required)        |
| GET    | `/tasks`            | List all tasks                                       |
| PUT    | `/tasks/{id}/claim` | Claim an open task with `claimer` and `proof`        |
| PUT    | `/admin/tasks/{id}` | Approve a claimed task (admin only)                  |
| POST   | `/admin/admins`     | Add an admin `{"address": "..."}` (admin only)       |

A created task gets an id of the form `task-<unix seconds>` and the status
`OPEN`; claiming moves it to `CLAIMED`, approval to `COMPLETED`. Successful
responses are JSON. Errors are plain text: 400 for a malformed body or
URL, 401 when the `X-Wallet-Address` header is not an admin, 404 for an
unknown route or task on approval, and 500 when the ledger refuses the
operation (for example claiming a task that is not open).

## Using the library

```python
from bountyboard.ledger import Ledger
from bountyboard.models import Task, TaskStatus

ledger = Ledger()
admin = ledger.admin_address
worker = ledger.generate_test_address("worker")

ledger.create_task(
    Task(id="task-1", title="Fix the docs", bounty="1000", status=TaskStatus.OPEN)
)
ledger.claim_task("task-1", worker, "see the merged change")
ledger.approve_task(ledger.get_task("task-1"), admin)
```

Operations that the ledger refuses, such as claiming a task that is not
open, approving as a non-admin, or removing the last admin, raise
`LedgerError`. `Ledger` also offers `list_tasks`, `list_addresses`,
`validate_address` (true only for addresses it generated), `is_admin`,
`add_admin`, `remove_admin` and `list_admins`.

`Task.to_dict` and `Task.from_dict` convert tasks to and from their JSON
form; an empty `claimer` or `proof` is left out of the output.

`bountyboard.address` holds the address derivation: `bech32_encode`,
`bech32_decode`, `public_key_from_seed` (compressed secp256k1 point for
the scalar SHA-256 of the seed) and `address_from_seed`.

`bountyboard.escrow.Escrow` describes bounty transfers:
`lock_task_bounty` and `distribute_tokens` return a `TokenDistribution`
from the creator to the escrow address and from escrow to the claimer.

The HTTP layer can be driven without a socket through `BountyApp.handle`,
which takes the method, path, headers and body and returns a `Response`.

## What it does not do

- Nothing is stored on disk: tasks, addresses and admins are lost when the
  server stops.
- No tokens actually move. `Escrow` only returns transfer records, it is
  not called by the ledger or the server, and `get_token_balance` reports
  `1000000` for every address.
- There is no HTTP endpoint for removing admins; use `Ledger.remove_admin`.