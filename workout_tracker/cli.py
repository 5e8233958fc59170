import argparse
import asyncio
import os
import sys
from typing import Optional

import structlog

from workout_tracker.client.api import ApiError, WorkoutTrackerClient
from workout_tracker.client.state import Store, category_color, format_duration
from workout_tracker.client import workflows
from workout_tracker.core.logging import configure_logging
from workout_tracker.schemas.workouts import Category

logger = structlog.get_logger(__name__)

DEFAULT_URL = os.getenv("WORKOUT_TRACKER_URL", "http://localhost:8000")


def _print_session(s, active_id: Optional[int] = None) -> None:
    marker = "*" if s.id == active_id else " "
    state = "active" if s.end_time is None else "ended"
    print(f"{marker} #{s.id} {s.name} [{state}] {format_duration(s.start_time, s.end_time)}")


def _print_exercise(e) -> None:
    print(f"  #{e.id} {e.name} ({e.category.value}, {category_color(e.category)}) {e.sets}x{e.reps} @ {e.weight:g}")


def cmd_health(client: WorkoutTrackerClient, store: Store, args) -> None:
    h = client.healthcheck()
    print(f"{h.status} {h.timestamp.isoformat()}")


def cmd_sessions(client: WorkoutTrackerClient, store: Store, args) -> None:
    workflows.refresh_sessions(client, store)
    active = store.state.active_session
    for s in store.state.sessions:
        _print_session(s, active.id if active else None)


def cmd_start(client: WorkoutTrackerClient, store: Store, args) -> None:
    session = workflows.start_session(client, store, args.name, template_id=args.template)
    print(f"Started session #{session.id} {session.name}")
    for e in store.state.active_exercises:
        _print_exercise(e)


def cmd_end(client: WorkoutTrackerClient, store: Store, args) -> None:
    if args.id is None:
        workflows.refresh_sessions(client, store)
    ended = workflows.end_session(client, store, args.id)
    print(f"Ended session #{ended.id} after {format_duration(ended.start_time, ended.end_time)}")


def cmd_log(client: WorkoutTrackerClient, store: Store, args) -> None:
    workflows.refresh_sessions(client, store)
    ex = workflows.log_exercise(
        client,
        store,
        name=args.name,
        category=args.category,
        sets=args.sets,
        reps=args.reps,
        weight=args.weight,
    )
    _print_exercise(ex)


def cmd_exercises(client: WorkoutTrackerClient, store: Store, args) -> None:
    for e in client.get_exercises(args.session_id):
        _print_exercise(e)


def cmd_delete_session(client: WorkoutTrackerClient, store: Store, args) -> None:
    res = client.delete_workout_session(args.id)
    print("deleted" if res.success else f"session #{args.id} not found")


def cmd_templates(client: WorkoutTrackerClient, store: Store, args) -> None:
    workflows.refresh_templates(client, store)
    for t in store.state.templates:
        print(f"#{t.id} {t.name}" + (f" - {t.description}" if t.description else ""))
        workflows.load_template_exercises(client, store, t.id)
        for te in store.state.template_exercises.get(t.id, ()):
            print(f"  {te.order_index}. {te.name} ({te.category.value}) {te.sets}x{te.reps} @ {te.weight:g}")


def cmd_template_create(client: WorkoutTrackerClient, store: Store, args) -> None:
    t = client.create_workout_template(args.name, args.description)
    print(f"Created template #{t.id} {t.name}")


def cmd_template_add(client: WorkoutTrackerClient, store: Store, args) -> None:
    order_index = args.order
    if order_index is None:
        # append after the exercises already in the template
        order_index = len(client.get_template_exercises(args.template_id))
    te = client.create_template_exercise(
        template_id=args.template_id,
        name=args.name,
        category=args.category,
        sets=args.sets,
        reps=args.reps,
        weight=args.weight,
        order_index=order_index,
    )
    print(f"Added {te.name} to template #{te.template_id} at position {te.order_index}")


def cmd_rest(client: WorkoutTrackerClient, store: Store, args) -> None:
    def show(state):
        if state.rest_remaining is not None:
            print(f"\rRest: {state.rest_remaining:>3}s", end="", flush=True)

    unsubscribe = store.subscribe(show)

    async def run():
        timer = workflows.bind_rest_timer(store)
        timer.start(args.seconds)
        await timer.wait()

    try:
        asyncio.run(run())
    finally:
        unsubscribe()
    print("\nRest over")


def cmd_serve(args) -> None:
    import uvicorn

    uvicorn.run("workout_tracker.main:app", host=args.host, port=args.port, reload=args.reload)


def _add_exercise_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("name")
    p.add_argument("category", choices=[c.value for c in Category])
    p.add_argument("sets", type=int)
    p.add_argument("reps", type=int)
    p.add_argument("weight", type=float)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workout-tracker", description="Workout tracker utilities")
    parser.add_argument("--url", default=DEFAULT_URL, help="API base URL")
    sub = parser.add_subparsers(dest="cmd", required=True)

    serve_p = sub.add_parser("serve", help="Run the API server")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument("--reload", action="store_true")

    sub.add_parser("health", help="Check the API")
    sub.add_parser("sessions", help="List workout sessions, newest first")

    start_p = sub.add_parser("start", help="Start a workout session")
    start_p.add_argument("name")
    start_p.add_argument("--template", type=int, default=None, help="Seed exercises from template id")

    end_p = sub.add_parser("end", help="End the active (or given) session")
    end_p.add_argument("--id", type=int, default=None)

    log_p = sub.add_parser("log", help="Log an exercise into the active session")
    _add_exercise_args(log_p)

    ex_p = sub.add_parser("exercises", help="List exercises of a session")
    ex_p.add_argument("session_id", type=int)

    del_p = sub.add_parser("delete-session", help="Delete a session and its exercises")
    del_p.add_argument("id", type=int)

    sub.add_parser("templates", help="List templates with their exercises")

    tc_p = sub.add_parser("template-create", help="Create a workout template")
    tc_p.add_argument("name")
    tc_p.add_argument("--description", default=None)

    ta_p = sub.add_parser("template-add", help="Add an exercise to a template")
    ta_p.add_argument("template_id", type=int)
    _add_exercise_args(ta_p)
    ta_p.add_argument("--order", type=int, default=None, help="Position in the template (default: append)")

    rest_p = sub.add_parser("rest", help="Run a rest timer")
    rest_p.add_argument("--seconds", type=int, default=60)

    return parser


COMMANDS = {
    "health": cmd_health,
    "sessions": cmd_sessions,
    "start": cmd_start,
    "end": cmd_end,
    "log": cmd_log,
    "exercises": cmd_exercises,
    "delete-session": cmd_delete_session,
    "templates": cmd_templates,
    "template-create": cmd_template_create,
    "template-add": cmd_template_add,
    "rest": cmd_rest,
}


def main(argv: Optional[list[str]] = None, client: Optional[WorkoutTrackerClient] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.cmd == "serve":
        cmd_serve(args)
        return 0

    # keep stdout for command output
    configure_logging(stream=sys.stderr)

    store = Store()
    own_client = client is None
    client = client or WorkoutTrackerClient(args.url)
    try:
        COMMANDS[args.cmd](client, store, args)
    except (ApiError, ValueError) as exc:
        logger.error("command_failed", command=args.cmd, error=str(exc))
        print(f"error: {exc}")
        return 1
    finally:
        if own_client:
            client.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
