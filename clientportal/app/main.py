"""Command-line entry point: fetch and print a client's dashboard."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from ..adapters.portal_rest import PortalRestAdapter
from ..adapters.session_local import SessionStorageLocal
from ..adapters.store_memory import DEMO_TOKEN, DEMO_WORK_PACKAGE_ID, build_demo_portal
from ..domain.entities import DashboardViewModel
from ..domain.ports import UseCaseError
from ..usecases.build_dashboard import BuildDashboard
from ..usecases.fetch_dashboard import FetchDashboard, FetchEngagement
from ..utils import logging as logging_utils
from ..viewmodels.dashboard_vm import DashboardVM
from .settings import PortalSettings


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch the client portal dashboard.")
    parser.add_argument("--work-package", help="work package id (stored in the session)")
    parser.add_argument(
        "--token",
        default=os.environ.get("PORTAL_TOKEN"),
        help="bearer ID token (default: $PORTAL_TOKEN)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--engagement", action="store_true", help="use the engagement endpoint")
    mode.add_argument(
        "--demo",
        action="store_true",
        help="build the dashboard offline from a seeded in-memory portal",
    )
    parser.add_argument("--summary", action="store_true", help="print the dashboard DTO instead")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def _run_demo(args: argparse.Namespace) -> DashboardViewModel:
    store, identity = build_demo_portal()
    build = BuildDashboard(identity_port=identity, store_port=store)
    return build(f"Bearer {DEMO_TOKEN}", args.work_package or DEMO_WORK_PACKAGE_ID)


def _run_remote(args: argparse.Namespace, settings: PortalSettings) -> DashboardViewModel:
    storage = SessionStorageLocal(settings.session_dir)
    session = storage.load_session()
    if args.work_package:
        session = session.with_work_package(args.work_package)
        storage.save_session(session)

    adapter = PortalRestAdapter(
        settings.api_base_url,
        token=args.token,
        request_timeout_s=settings.request_timeout_s,
        retries=settings.retries,
    )
    if args.engagement:
        return FetchEngagement(api_port=adapter)()
    return FetchDashboard(api_port=adapter)(session)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        settings = PortalSettings.from_env()
    except ValueError as err:
        print(f"CONFIG_INVALID: {err}", file=sys.stderr)
        return 1

    level = logging_utils.configure_root(args.log_level, debug=settings.debug_logging)
    log = logging.getLogger(__name__)
    log.debug("Logging at %s, portal %s", logging.getLevelName(level), settings.api_base_url)

    try:
        view_model = _run_demo(args) if args.demo else _run_remote(args, settings)
    except UseCaseError as err:
        log.debug("Dashboard fetch failed", exc_info=True)
        print(f"{err.code}: {err.message}", file=sys.stderr)
        return 1

    if args.summary:
        output = DashboardVM().apply_view_model(view_model)
    else:
        output = view_model.to_dict()
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
