import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from .application.bootstrap import bootstrap_app
from .application.container import AppConfig
from .application.metrics import configure_metrics_logger
from .application.pages import Page
from .domain import ValidationFailure
from .domain.catalog import DEFAULT_MAX_PRICE, DEFAULT_SEARCH_CITY
from .infrastructure.metrics import metrics
from .infrastructure.repositories import ACTIVITY_LIMIT

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_app_config() -> AppConfig:
    db_path = os.getenv("DB_PATH", "abroad_tracker.db").strip() or "abroad_tracker.db"
    catalog_path = os.getenv("CATALOG_PATH", "").strip() or None
    activity_limit = int(os.getenv("ACTIVITY_LIMIT", str(ACTIVITY_LIMIT)))
    metrics_log_path = os.getenv("METRICS_LOG_PATH", "").strip() or None
    config = AppConfig(
        db_path=db_path,
        catalog_path=catalog_path,
        activity_limit=activity_limit,
        metrics_log_path=metrics_log_path,
    )
    logger.info(
        "Config loaded: db_path=%s, catalog=%s, activity_limit=%s, metrics_log=%s",
        config.db_path,
        config.catalog_path or "built-in",
        config.activity_limit,
        config.metrics_log_path or "off",
    )
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abroad-tracker",
        description="Track saved universities, dorm favorites and application documents.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="store the local display profile")
    login.add_argument("email")
    login.add_argument("password")
    login.add_argument("--confirm", help="password confirmation for a new account")

    sub.add_parser("summary", help="counters and recent activity")

    unis = sub.add_parser("unis", help="list saved universities")
    unis.add_argument("--query", default="", help="case-insensitive filter")

    add_uni = sub.add_parser("add-uni", help="save a university")
    add_uni.add_argument("name")
    add_uni.add_argument("city")
    add_uni.add_argument("field")
    add_uni.add_argument("--type", default="Public", help="Public or Private")

    remove_uni = sub.add_parser("remove-uni", help="remove a saved university by id")
    remove_uni.add_argument("university_id")

    dorms = sub.add_parser("dorms", help="search the dorm catalog")
    dorms.add_argument("--city", default=DEFAULT_SEARCH_CITY)
    dorms.add_argument("--max-price", type=int, default=DEFAULT_MAX_PRICE)

    sub.add_parser("favs", help="list dorm favorites")

    fav = sub.add_parser("fav", help="toggle a catalog dorm as favorite")
    fav.add_argument("dorm_id")

    unfav = sub.add_parser("unfav", help="remove a dorm favorite")
    unfav.add_argument("dorm_id")

    sub.add_parser("docs", help="show the document checklist")
    check = sub.add_parser("check", help="mark a document as done")
    check.add_argument("index", type=int)
    uncheck = sub.add_parser("uncheck", help="mark a document as not done")
    uncheck.add_argument("index", type=int)
    sub.add_parser("mark-all", help="mark every document as done")
    sub.add_parser("clear-all", help="clear every document check")

    sub.add_parser("activity", help="show recent activity")
    sub.add_parser("export", help="printable summary")
    sub.add_parser("reset", help="restore demo data (keeps the profile)")
    return parser


async def dispatch(workflow, args: argparse.Namespace) -> Page:
    command = args.command
    if command == "login":
        return await workflow.sign_in(args.email, args.password, confirm=args.confirm)
    if command == "summary":
        return await workflow.summary_page()
    if command == "unis":
        return await workflow.universities_page(args.query)
    if command == "add-uni":
        return await workflow.add_university(args.name, args.city, args.field, args.type)
    if command == "remove-uni":
        return await workflow.remove_university(args.university_id)
    if command == "dorms":
        return await workflow.dorm_search_page(args.city, args.max_price)
    if command == "favs":
        return await workflow.dorm_favorites_page()
    if command == "fav":
        return await workflow.toggle_dorm_favorite(args.dorm_id)
    if command == "unfav":
        return await workflow.remove_dorm_favorite(args.dorm_id)
    if command == "docs":
        return await workflow.documents_page()
    if command == "check":
        return await workflow.set_document_done(args.index, True)
    if command == "uncheck":
        return await workflow.set_document_done(args.index, False)
    if command == "mark-all":
        return await workflow.mark_all_documents(True)
    if command == "clear-all":
        return await workflow.mark_all_documents(False)
    if command == "activity":
        return await workflow.activity_page()
    if command == "export":
        return await workflow.export_page()
    if command == "reset":
        return await workflow.reset_all()
    raise ValueError(f"unknown command: {command}")


def render_page(page: Page) -> str:
    lines = [f"* {notice}" for notice in page.notices]
    lines.append(page.text)
    return "\n".join(lines)


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_app_config()
    if config.metrics_log_path:
        metrics.configure(configure_metrics_logger(config.metrics_log_path))
    async with bootstrap_app(config) as container:
        try:
            page = await dispatch(container.workflow, args)
        except ValidationFailure as exc:
            print(str(exc), file=sys.stderr)
            return 2
    print(render_page(page))
    return 0


def run() -> None:
    load_dotenv()
    configure_logging()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user, shutting down")


if __name__ == "__main__":
    run()
