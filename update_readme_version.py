"""Stamp the project version into the dependency snippet of README.md.

Usage:
    python update_readme_version.py --group com.example --name my-project
    python update_readme_version.py --project-dir path/to/project

Group, name and version come from the flags, then from project.json in the
project directory; the version finally falls back to version.txt.
"""

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from core import ConfigError, StampOutcome, StamperError, apply

log = logging.getLogger(__name__)

PROJECT_FILE = "project.json"
VERSION_FILE = "version.txt"
README_FILE = "README.md"


@dataclass
class ProjectInfo:
    group: str
    name: str
    version: str
    root: Path


def get_version(root=".") -> str:
    path = Path(root) / VERSION_FILE
    if not path.is_file():
        raise ConfigError(f"{VERSION_FILE} not found in {path.parent}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read().strip()


def _read_project_file(root: Path) -> dict:
    p = root / PROJECT_FILE
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"{PROJECT_FILE} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{PROJECT_FILE} must contain a JSON object")
    return data


def load_project(
    root=".",
    group: Optional[str] = None,
    name: Optional[str] = None,
    version: Optional[str] = None,
) -> ProjectInfo:
    """Resolve the project coordinate. Explicit arguments override project.json."""
    root = Path(root)
    defaults = _read_project_file(root)

    group = group or defaults.get("group")
    name = name or defaults.get("name")
    version = version or defaults.get("version") or get_version(root)

    missing = [label for label, value in (("group", group), ("name", name)) if not value]
    if missing:
        raise ConfigError(
            f"Project {' and '.join(missing)} not set; pass --{missing[0]} or add it to {PROJECT_FILE}"
        )
    for label, value in (("group", group), ("name", name)):
        if ":" in str(value):
            raise ConfigError(f"Project {label} must not contain ':' (got {value!r})")
    version = str(version).strip()
    if not version:
        raise ConfigError(f"Project version is empty; set it in {VERSION_FILE} or pass --version")
    return ProjectInfo(group=str(group), name=str(name), version=version, root=root)


def update_readme(
    project: ProjectInfo,
    readme: str = README_FILE,
    report: Optional[Callable[[str], None]] = None,
) -> StampOutcome:
    path = project.root / readme
    outcome = apply(project.group, project.name, project.version, path, log=report or log.info)
    log.debug("%s: %s (found %s)", path, outcome.result.value, outcome.found)
    return outcome


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--project-dir", type=Path, default=Path("."),
                        help="Project root holding README.md, version.txt and project.json.")
    parser.add_argument("--group", help="Artifact group, e.g. 'com.example'.")
    parser.add_argument("--name", help="Artifact id, e.g. 'my-project'.")
    parser.add_argument("--version", help="Version to stamp (defaults to version.txt).")
    parser.add_argument("--readme", default=README_FILE,
                        help="README path relative to the project dir.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO, format="%(message)s")
    try:
        project = load_project(args.project_dir, args.group, args.name, args.version)
        update_readme(project, args.readme)
    except StamperError as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
