from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .config import get_cycle_guard_mode, get_log_level, get_visibility_config, load_graph_config
from .constants import CYCLE_GUARD_MODES
from .errors import TodoGraphError
from .filters import VisibilityFilter, filter_tasks
from .graph import build_graph, project, validate_edge
from .interaction import AddDependency
from .io_utils import load_tasks
from .logging_utils import configure_logging
from .server import create_app
from .visualize import render_layer_summary, render_layout_table


def _resolve_project_dir(project_dir: Optional[str]) -> Path:
    return Path(project_dir).expanduser().resolve() if project_dir else Path.cwd().resolve()


def _config(args: argparse.Namespace) -> dict[str, Any]:
    config, err = load_graph_config(_resolve_project_dir(args.project_dir))
    if err:
        logger.warning("Ignoring unreadable config: {}", err)
    return config


def _layout(args: argparse.Namespace) -> int:
    config = args.config
    visibility = VisibilityFilter(args.visibility) if args.visibility else get_visibility_config(config)
    try:
        tasks = filter_tasks(load_tasks(Path(args.task_file)), visibility)
        graph = build_graph(tasks)
    except (OSError, TodoGraphError) as exc:
        sys.stderr.write(str(exc) + '\n')
        return 1

    if args.format == 'table':
        sys.stdout.write(render_layout_table(graph))
    elif args.format == 'layers':
        sys.stdout.write(render_layer_summary(graph))
    else:
        sys.stdout.write(json.dumps(project(graph).to_dict(), indent=2) + '\n')
    return 0


def _validate(args: argparse.Namespace) -> int:
    config = args.config
    mode = args.guard_mode or get_cycle_guard_mode(config)
    try:
        graph = build_graph(load_tasks(Path(args.task_file)))
        decision = validate_edge(graph, args.source, args.target, mode=mode)
    except (OSError, TodoGraphError) as exc:
        sys.stderr.write(str(exc) + '\n')
        return 1

    payload = decision.to_dict()
    if decision.accepted:
        payload['command'] = AddDependency(from_id=args.source, to_id=args.target).to_dict()
    sys.stdout.write(json.dumps(payload, indent=2) + '\n')
    return 0 if decision.accepted else 3


def _server(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        sys.stderr.write("Install server extras: pip install 'todo-graph[server]'\n")
        return 1

    app = create_app(project_dir=_resolve_project_dir(args.project_dir))
    uvicorn.run(app, host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Lay out task dependency graphs and guard edits against cycles')
    parser.add_argument('--project-dir', default=None, help='Directory holding .todo_graph/config.yaml (default: current working directory)')
    parser.add_argument('--log-level', default=None, help='Log level (default: from config, else INFO)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    layout = subparsers.add_parser('layout', help='Compute the layered layout of a task file')
    layout.add_argument('task_file')
    layout.add_argument('--format', default='json', choices=['json', 'table', 'layers'])
    layout.add_argument('--visibility', default=None, choices=[v.value for v in VisibilityFilter])
    layout.set_defaults(func=_layout)

    validate = subparsers.add_parser('validate', help='Check whether a new dependency may be added')
    validate.add_argument('task_file')
    validate.add_argument('source', type=int)
    validate.add_argument('target', type=int)
    validate.add_argument('--guard-mode', default=None, choices=sorted(CYCLE_GUARD_MODES))
    validate.set_defaults(func=_validate)

    server = subparsers.add_parser('server', help='Start the HTTP API')
    server.add_argument('--host', default='127.0.0.1')
    server.add_argument('--port', default=8000, type=int)
    server.add_argument('--reload', action='store_true')
    server.set_defaults(func=_server)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.config = _config(args)
    configure_logging(args.log_level or get_log_level(args.config))
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    return int(handler(args) or 0)


if __name__ == '__main__':
    raise SystemExit(main())
