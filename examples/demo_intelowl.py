"""CLI demo that exercises the :class:`intelowl.IntelOwl` client.

Run with the virtual environment activated::

    python examples/demo_intelowl.py 8.8.8.8

Set ``INTELOWL_URL`` / ``INTELOWL_TOKEN`` environment variables to point at
your IntelOwl instance (defaults to ``http://localhost:80``).
"""

import logging
import os
import sys
from pprint import pprint

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from intelowl import ClientError, Context, IntelOwl, TransportError

logging.basicConfig(level=logging.INFO)


def main() -> None:
    observable = sys.argv[1] if len(sys.argv) > 1 else "8.8.8.8"

    with IntelOwl() as client:
        try:
            tags = client.tags.list()
            print(f"Fetched {len(tags)} tags")

            submission = client.analyses.observable(observable, analyzers=["Classic_DNS"])
            job_id = submission["job_id"]
            print(f"Submitted {observable} as job {job_id} ({submission.get('status')})")

            with Context.background().with_timeout(300) as ctx:
                job = client.tools.jobs.wait_for_job(client, job_id, ctx=ctx, poll_interval=3)
        except ClientError as exc:
            print(f"IntelOwl rejected the request ({exc.status_code}): {exc.message}")
            return
        except TransportError as exc:
            print(f"Could not reach IntelOwl: {exc}")
            return

    print(f"\nJob {job_id} finished with status {job.get('status')}")
    for report in job.get("analyzer_reports", []):
        print(f"\n{report.get('name')} [{report.get('status')}]")
        pprint(report.get("report"))


if __name__ == "__main__":
    main()
