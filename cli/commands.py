"""
CLI subcommand implementations for the repro-tracker system.

Subcommands::

    repro-tracker mother    add|remove ID | list
    repro-tracker litter    record MOTHER --born DATE --size N [--father F] [--notes T]
    repro-tracker litter    update|delete LITTER | list MOTHER
    repro-tracker offspring record LITTER ID --sex S | update ID | delete ID
    repro-tracker offspring wean|death ID | list LITTER
    repro-tracker report    generate MOTHER --start D --end D --name R
    repro-tracker report    rename OLD NEW | delete R | view R | list
    repro-tracker summary   get|regenerate R [--model M] [--api-key K]

Every subcommand accepts ``--project`` (directory holding the database,
default: current directory) and ``--verbose``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from contracts.v1 import (
    GenerateReportRequest,
    LitterUpdate,
    OffspringUpdate,
    RecordLitterRequest,
    RecordOffspringRequest,
    adapt_generate_report_request,
    adapt_litter_update,
    adapt_offspring_update,
    adapt_record_litter_request,
    adapt_record_offspring_request,
)
from repro_platform import OperationResult, ReproductionTracker
from repro_platform.models import VALID_SEXES
from repro_platform.runtime.config import AVAILABLE_MODELS, default_summary_model
from repro_platform.runtime.summarizer import LLMSummarizer


def _fail(message: str):
    print(f"Error: {message}")
    sys.exit(1)


def _unwrap(result: OperationResult):
    """Return the result value, or print the error and exit 1."""
    if not result.ok:
        assert result.error is not None
        _fail(f"{result.error.message} [{result.error.kind.value}]")
    return result.value


def _validate(model_cls, payload: dict):
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        _fail(f"Invalid arguments: {problems}")


def _open_tracker(args, summarizer=None) -> ReproductionTracker:
    return ReproductionTracker.open(Path(args.project), summarizer)


def _supplied(args, *names: str) -> dict:
    """Collect the named options the user actually passed."""
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


# ---------------------------------------------------------------------------
# Subcommand: mother
# ---------------------------------------------------------------------------

def cmd_mother(args):
    """Register, remove and list mothers."""
    with _open_tracker(args) as tracker:
        action = args.mother_action

        if action == 'add':
            _unwrap(tracker.add_mother(args.id))
            print(f"✓ Mother {args.id} registered.")

        elif action == 'remove':
            _unwrap(tracker.remove_mother(args.id))
            print(f"✓ Mother {args.id} removed. Her litters are kept.")

        elif action == 'list':
            mothers = _unwrap(tracker.list_mothers())
            if not mothers:
                print("No mothers registered.")
                return
            print(f"\n{'ID':<20}  {'Next #':>7}  {'Registered'}")
            print("-" * 50)
            for m in mothers:
                print(f"{m['id']:<20}  {m['next_litter_number']:>7}  {m['created_at'][:16]}")


# ---------------------------------------------------------------------------
# Subcommand: litter
# ---------------------------------------------------------------------------

def cmd_litter(args):
    """Record, update, delete and list litters."""
    with _open_tracker(args) as tracker:
        action = args.litter_action

        if action == 'record':
            req = _validate(RecordLitterRequest, {
                "mother_id": args.mother_id,
                "father_id": args.father,
                "birth_date": args.born,
                "reported_litter_size": args.size,
                "notes": args.notes,
                "auto_register_mother": args.register_mother,
            })
            litter_id = _unwrap(tracker.record_litter(**adapt_record_litter_request(req)))
            print(f"✓ Litter {litter_id} recorded.")

        elif action == 'update':
            payload = _supplied(args, "mother_id", "father_id", "notes")
            if args.born is not None:
                payload["birth_date"] = args.born
            if args.size is not None:
                payload["reported_litter_size"] = args.size
            if args.unknown_father:
                payload["father_id"] = None
            if not payload:
                _fail("Nothing to update.")
            req = _validate(LitterUpdate, payload)
            _unwrap(tracker.update_litter(args.litter_id, **adapt_litter_update(req)))
            print(f"✓ Litter {args.litter_id} updated.")

        elif action == 'delete':
            _unwrap(tracker.delete_litter(args.litter_id))
            print(f"✓ Litter {args.litter_id} and its offspring deleted.")

        elif action == 'list':
            litters = _unwrap(tracker.list_litters(args.mother_id))
            if not litters:
                print(f"No litters recorded for {args.mother_id}.")
                return
            print(f"\n{'ID':<20}  {'Born':<10}  {'Father':<15}  {'Reported':>8}")
            print("-" * 60)
            for l in litters:
                father = l["father_id"] or "unknown"
                print(f"{l['id']:<20}  {l['birth_date']:<10}  {father:<15}  {l['reported_litter_size']:>8}")


# ---------------------------------------------------------------------------
# Subcommand: offspring
# ---------------------------------------------------------------------------

def _status_label(o: dict) -> str:
    alive = "alive" if o["is_alive"] else "dead"
    weaned = "weaned" if o["survived_till_weaning"] else "unweaned"
    return f"{alive}, {weaned}"


def cmd_offspring(args):
    """Record, update and track the lifecycle of offspring."""
    with _open_tracker(args) as tracker:
        action = args.offspring_action

        if action == 'record':
            req = _validate(RecordOffspringRequest, {
                "litter_id": args.litter_id,
                "offspring_id": args.id,
                "sex": args.sex,
                "notes": args.notes,
            })
            _unwrap(tracker.record_offspring(**adapt_record_offspring_request(req)))
            print(f"✓ Offspring {args.id} recorded in litter {args.litter_id}.")

        elif action == 'update':
            payload = _supplied(args, "new_offspring_id", "litter_id", "sex", "notes")
            if not payload:
                _fail("Nothing to update.")
            req = _validate(OffspringUpdate, payload)
            final_id = _unwrap(tracker.update_offspring(args.id, **adapt_offspring_update(req)))
            print(f"✓ Offspring {final_id} updated.")

        elif action == 'wean':
            _unwrap(tracker.record_weaning(args.id))
            print(f"✓ Weaning recorded for {args.id}.")

        elif action == 'death':
            _unwrap(tracker.record_death(args.id))
            print(f"✓ Death recorded for {args.id}.")

        elif action == 'delete':
            _unwrap(tracker.delete_offspring(args.id))
            print(f"✓ Offspring {args.id} deleted.")

        elif action == 'list':
            offspring = _unwrap(tracker.list_offspring(args.litter_id))
            if not offspring:
                print(f"No offspring recorded for litter {args.litter_id}.")
                return
            print(f"\n{'ID':<20}  {'Sex':<9}  {'Status'}")
            print("-" * 50)
            for o in offspring:
                print(f"{o['id']:<20}  {o['sex']:<9}  {_status_label(o)}")


# ---------------------------------------------------------------------------
# Subcommand: report
# ---------------------------------------------------------------------------

def cmd_report(args):
    """Generate and manage performance reports."""
    with _open_tracker(args) as tracker:
        action = args.report_action

        if action == 'generate':
            req = _validate(GenerateReportRequest, {
                "target_mother_id": args.mother_id,
                "start_date": args.start,
                "end_date": args.end,
                "report_name": args.name,
            })
            entries = _unwrap(tracker.generate_report(**adapt_generate_report_request(req)))
            _print_entries(args.name, entries)

        elif action == 'rename':
            _unwrap(tracker.rename_report(args.old_name, args.new_name))
            print(f"✓ Report '{args.old_name}' renamed to '{args.new_name}'.")

        elif action == 'delete':
            _unwrap(tracker.delete_report(args.name))
            print(f"✓ Report '{args.name}' deleted.")

        elif action == 'view':
            _print_entries(args.name, _unwrap(tracker.view_report(args.name)))

        elif action == 'list':
            reports = _unwrap(tracker.list_reports())
            if not reports:
                print("No reports found.")
                return
            print(f"\n{'Name':<25}  {'Entries':>7}  {'Summary':<7}  {'Generated'}")
            print("-" * 65)
            for r in reports:
                summary = "yes" if r["has_summary"] else "no"
                print(f"{r['name']:<25}  {r['entry_count']:>7}  {summary:<7}  {r['generated_at'][:16]}")


def _print_entries(name: str, entries: list[str]):
    print(f"\nReport '{name}' ({len(entries)} entries)")
    for i, entry in enumerate(entries, start=1):
        print(f"  {i}. {entry}")


# ---------------------------------------------------------------------------
# Subcommand: summary
# ---------------------------------------------------------------------------

async def cmd_summary(args):
    """Show or regenerate the AI summary of a report.

    ``get`` serves a cached summary without building an LLM client, so no
    API key is needed until the summarizer actually has to run.
    """
    with _open_tracker(args) as tracker:
        if args.summary_action == 'get':
            cached = _unwrap(tracker.get_report(args.name))["summary"]
            if cached:
                _print_summary(args.name, json.loads(cached))
                return

        try:
            tracker.summarizer = LLMSummarizer.from_env(model=args.model, api_key=args.api_key)
        except (ValueError, ImportError) as e:
            _fail(str(e))

        if args.summary_action == 'regenerate':
            summary = _unwrap(await tracker.regenerate_summary(args.name))
        else:
            summary = _unwrap(await tracker.get_summary(args.name))
    _print_summary(args.name, json.loads(summary))


_SUMMARY_SECTIONS = (
    ("highPerformers", "High performers"),
    ("lowPerformers", "Low performers"),
    ("concerningTrends", "Concerning trends"),
    ("averagePerformers", "Average performers"),
    ("potentialRecordErrors", "Potential record errors"),
)


def _print_summary(name: str, summary: dict):
    print(f"\nSummary of report '{name}'")
    for key, label in _SUMMARY_SECTIONS:
        ids = summary.get(key) or []
        print(f"  {label}: {', '.join(ids) if ids else '-'}")
    print(f"\n{summary.get('insights', '')}")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project", default=".", help="Directory holding the tracker database (default: .)")
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="repro-tracker",
        description="Reproduction tracking for breeding animals",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- mother ---
    p_mother = subparsers.add_parser("mother", help="Manage mothers")
    sp_mother = p_mother.add_subparsers(dest="mother_action", required=True)
    for action, help_text in (("add", "Register a mother"), ("remove", "Remove a mother")):
        sp = sp_mother.add_parser(action, parents=[common], help=help_text)
        sp.add_argument("id", help="Mother ID")
    sp_mother.add_parser("list", parents=[common], help="List registered mothers")

    # --- litter ---
    p_litter = subparsers.add_parser("litter", help="Manage litters")
    sp_litter = p_litter.add_subparsers(dest="litter_action", required=True)

    sp_record = sp_litter.add_parser("record", parents=[common], help="Record a litter")
    sp_record.add_argument("mother_id", help="Mother ID")
    sp_record.add_argument("--born", required=True, help="Birth date (YYYY-MM-DD)")
    sp_record.add_argument("--size", type=int, required=True, help="Reported litter size")
    sp_record.add_argument("--father", default=None, help="Father ID (omit if unknown)")
    sp_record.add_argument("--notes", default=None)
    sp_record.add_argument(
        "--register-mother", action="store_true",
        help="Register the mother first if she is unknown",
    )

    sp_lupdate = sp_litter.add_parser("update", parents=[common], help="Update a litter")
    sp_lupdate.add_argument("litter_id", help="Litter ID")
    sp_lupdate.add_argument("--mother", dest="mother_id", default=None)
    father = sp_lupdate.add_mutually_exclusive_group()
    father.add_argument("--father", dest="father_id", default=None)
    father.add_argument("--unknown-father", action="store_true", help="Clear the father")
    sp_lupdate.add_argument("--born", default=None, help="Birth date (YYYY-MM-DD)")
    sp_lupdate.add_argument("--size", type=int, default=None, help="Reported litter size")
    sp_lupdate.add_argument("--notes", default=None)

    sp_ldelete = sp_litter.add_parser("delete", parents=[common], help="Delete a litter and its offspring")
    sp_ldelete.add_argument("litter_id", help="Litter ID")

    sp_llist = sp_litter.add_parser("list", parents=[common], help="List a mother's litters")
    sp_llist.add_argument("mother_id", help="Mother ID")

    # --- offspring ---
    p_off = subparsers.add_parser("offspring", help="Manage offspring")
    sp_off = p_off.add_subparsers(dest="offspring_action", required=True)

    sp_orecord = sp_off.add_parser("record", parents=[common], help="Record an offspring")
    sp_orecord.add_argument("litter_id", help="Litter ID")
    sp_orecord.add_argument("id", help="Offspring ID")
    sp_orecord.add_argument("--sex", required=True, choices=VALID_SEXES)
    sp_orecord.add_argument("--notes", default=None)

    sp_oupdate = sp_off.add_parser("update", parents=[common], help="Update an offspring")
    sp_oupdate.add_argument("id", help="Offspring ID")
    sp_oupdate.add_argument("--new-id", dest="new_offspring_id", default=None)
    sp_oupdate.add_argument("--litter", dest="litter_id", default=None)
    sp_oupdate.add_argument("--sex", default=None, choices=VALID_SEXES)
    sp_oupdate.add_argument("--notes", default=None)

    for action, help_text in (
        ("wean", "Record that an offspring survived till weaning"),
        ("death", "Record the death of an offspring"),
        ("delete", "Delete an offspring"),
    ):
        sp = sp_off.add_parser(action, parents=[common], help=help_text)
        sp.add_argument("id", help="Offspring ID")

    sp_olist = sp_off.add_parser("list", parents=[common], help="List a litter's offspring")
    sp_olist.add_argument("litter_id", help="Litter ID")

    # --- report ---
    p_report = subparsers.add_parser("report", help="Manage performance reports")
    sp_report = p_report.add_subparsers(dest="report_action", required=True)

    sp_gen = sp_report.add_parser("generate", parents=[common], help="Add a mother's performance to a report")
    sp_gen.add_argument("mother_id", help="Mother ID")
    sp_gen.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    sp_gen.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    sp_gen.add_argument("--name", required=True, help="Report name")

    sp_rename = sp_report.add_parser("rename", parents=[common], help="Rename a report")
    sp_rename.add_argument("old_name")
    sp_rename.add_argument("new_name")

    for action, help_text in (("delete", "Delete a report"), ("view", "Show a report's entries")):
        sp = sp_report.add_parser(action, parents=[common], help=help_text)
        sp.add_argument("name", help="Report name")
    sp_report.add_parser("list", parents=[common], help="List reports")

    # --- summary ---
    p_summary = subparsers.add_parser("summary", help="AI summaries of reports")
    sp_summary = p_summary.add_subparsers(dest="summary_action", required=True)
    for action, help_text in (
        ("get", "Show the cached summary, generating it if needed"),
        ("regenerate", "Generate a fresh summary"),
    ):
        sp = sp_summary.add_parser(action, parents=[common], help=help_text)
        sp.add_argument("name", help="Report name")
        sp.add_argument(
            "--model", choices=list(AVAILABLE_MODELS.keys()),
            default=default_summary_model(),
            help=f"Model (default: {default_summary_model()})",
        )
        sp.add_argument("--api-key", help="API key (or set env var)")

    return parser


async def main(argv: list[str] | None = None):
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == 'mother':
        cmd_mother(args)
    elif args.command == 'litter':
        cmd_litter(args)
    elif args.command == 'offspring':
        cmd_offspring(args)
    elif args.command == 'report':
        cmd_report(args)
    elif args.command == 'summary':
        await cmd_summary(args)
