#!/usr/bin/env python3
"""Build a heliosim validation report.

Steps: the unit tests, a probe-fan frame run, the free-flight and impact
scenarios with approach plots, a catalog orbit map and the example script.
Each run lands in build/reports/<UTC stamp>/ and is mirrored to latest/.

Usage:
  python3 tools/run_all.py
  python3 tools/run_all.py --profile standard --out build/reports
"""

from __future__ import annotations

import argparse
import contextlib
import csv
import io
import json
import os
import shutil
import subprocess
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np


REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_OUT_ROOT = REPO_ROOT / "build" / "reports"

# profile -> (fan duration s, fan size, free-flight frames, impact targets)
PROFILES: dict[str, tuple[float, int, int, tuple[str, ...]]] = {
    "smoke": (10.0, 20, 300, ("Earth",)),
    "standard": (60.0, 50, 1200, ("Earth", "Mars", "Jupiter")),
    "full": (120.0, 80, 3600, ("Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn")),
}

FRAME_FIELDS = (
    "time_s",
    "elapsed_days",
    "time_multiplier",
    "live_probes",
    "live_explosions",
    "removed_probes",
    "bodies_refreshed",
)


def _run_logged(cmd: list[str], log_path: Path) -> int:
    """Run a command from the repo root with heliosim importable; output goes to log_path."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    env = {**os.environ, "PYTHONPATH": str(REPO_ROOT)}
    with log_path.open("w", encoding="utf-8") as log:
        log.write("$ " + " ".join(cmd) + "\n\n")
        log.flush()
        return subprocess.run(cmd, cwd=str(REPO_ROOT), stdout=log, stderr=subprocess.STDOUT,
                              text=True, env=env).returncode


def _git_commit() -> str:
    try:
        return subprocess.check_output(["git", "rev-parse", "HEAD"], cwd=str(REPO_ROOT), text=True).strip()
    except (OSError, subprocess.CalledProcessError):
        return ""


def _to_json(value: Any) -> Any:
    if isinstance(value, (np.ndarray, np.generic)):
        return value.tolist()
    if is_dataclass(value):
        return asdict(value)
    return str(value)


def _dump(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True, default=_to_json) + "\n", encoding="utf-8")


def _frame_rows(history) -> list[dict[str, Any]]:
    rows = []
    for frame in history:
        row = {name: getattr(frame, name) for name in FRAME_FIELDS}
        row["collisions"] = len(frame.collisions)
        rows.append(row)
    return rows


def _write_frames_csv(path: Path, rows: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=[*FRAME_FIELDS, "collisions"])
        writer.writeheader()
        writer.writerows(rows)


def _save(fig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)


def _plot_frames(rows: list[dict[str, Any]], path: Path, title: str) -> None:
    if not rows:
        return
    t = [r["time_s"] for r in rows]
    panels = (
        ("Simulated days", [r["elapsed_days"] for r in rows]),
        ("Live probes", [r["live_probes"] for r in rows]),
        ("Live explosions", [r["live_explosions"] for r in rows]),
        ("Collisions (cum.)", np.cumsum([r["collisions"] for r in rows])),
    )
    fig, axs = plt.subplots(len(panels), 1, figsize=(12, 10), sharex=True)
    fig.suptitle(title)
    for ax, (label, values) in zip(axs, panels):
        ax.step(t, values, where="post")
        ax.set_ylabel(label)
        ax.grid(True)
    axs[-1].set_xlabel("Real time (s)")
    _save(fig, path)


def _plot_orbits(system, path: Path) -> None:
    fig, ax = plt.subplots(figsize=(10, 10))
    for name in system.children(system.root):
        if system.body(name).kind not in ("planet", "dwarf planet", "comet"):
            continue
        ring = system.orbit_path(name, 361)
        if len(ring):
            ax.plot(ring[:, 0], ring[:, 1], linewidth=0.8)
        x, y, _ = system.absolute_position(name)
        ax.plot(x, y, "o", markersize=3)
        ax.annotate(name, (x, y), fontsize=7)
    ax.plot(0.0, 0.0, "*", markersize=12, color="orange")
    ax.set_aspect("equal")
    ax.set_xlabel("x (1e6 km)")
    ax.set_ylabel("y (1e6 km)")
    ax.set_title("Catalog orbits at epoch")
    ax.grid(True)
    _save(fig, path)


def _plot_approach(scenario, path: Path) -> None:
    target = scenario.config.target
    sample = next(s for s in scenario.simulator.system.samples() if s.name == target)
    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(scenario.time_history, scenario.distance_history)
    ax.axhline(scenario.simulator.probes.effective_collision_radius(sample),
               linestyle="--", color="red", label="collision radius")
    ax.set_xlabel("Real time (s)")
    ax.set_ylabel("Distance to target (world units)")
    ax.set_title(f"Approach to {target}")
    ax.legend()
    ax.grid(True)
    _save(fig, path)


def _captured(out_dir: Path, name: str, fn: Callable[[], Any]) -> Any:
    """Call fn with stdout and stderr written to logs/simulation_<name>.log."""
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf), contextlib.redirect_stderr(buf):
        result = fn()
    log = out_dir / "logs" / f"simulation_{name}.log"
    log.parent.mkdir(parents=True, exist_ok=True)
    log.write_text(buf.getvalue(), encoding="utf-8")
    return result


def _probe_fan(out_dir: Path, duration_s: float, n_probes: int) -> dict[str, Any]:
    from heliosim.core.config import SimulationConfig
    from heliosim.core.simulator import Simulator
    from heliosim.probes.launcher import LaunchSettings

    sim = Simulator(SimulationConfig(duration_seconds=duration_s))
    origin = sim.system.absolute_position("Earth") * 1.05
    settings = LaunchSettings(mass_fraction=0.2, speed_fraction=0.3)
    for angle in np.linspace(0.0, 2.0 * np.pi, n_probes, endpoint=False):
        sim.launch_from_settings(origin, [np.cos(angle), np.sin(angle), 0.0], settings)
    _captured(out_dir, "probe_fan", sim.run)

    rows = _frame_rows(sim.history)
    _write_frames_csv(out_dir / "data" / "probe_fan_frames.csv", rows)
    _plot_frames(rows, out_dir / "images" / "probe_fan_frames.png", f"Fan of {n_probes} probes from Earth")
    _plot_orbits(sim.system, out_dir / "images" / "orbits.png")
    _dump(out_dir / "data" / "probe_fan_telemetry.json", sim.get_telemetry())
    return {"frames": len(rows), "duration_seconds": duration_s, "probes_launched": n_probes}


def _run_scenarios(out_dir: Path, profile: str) -> dict[str, Any]:
    sys.path.insert(0, str(REPO_ROOT))
    from heliosim.scenarios.free_flight import FreeFlightScenario, FreeFlightScenarioConfig
    from heliosim.scenarios.impact import ImpactScenario, ImpactScenarioConfig

    duration_s, n_probes, free_frames, targets = PROFILES[profile]
    results: dict[str, Any] = {"probe_fan": _probe_fan(out_dir, duration_s, n_probes)}

    free = FreeFlightScenario(FreeFlightScenarioConfig(num_frames=free_frames))
    results["free_flight"] = _captured(out_dir, "free_flight", free.run)

    for target in targets:
        name = f"impact_{target.lower()}"
        scenario = ImpactScenario(ImpactScenarioConfig(target=target))
        results[name] = _captured(out_dir, name, scenario.run)
        _write_frames_csv(out_dir / "data" / f"{name}_frames.csv", _frame_rows(scenario.simulator.history))
        if scenario.distance_history:
            _plot_approach(scenario, out_dir / "images" / f"{name}_approach.png")

    for name, result in results.items():
        _dump(out_dir / "data" / f"{name}_results.json", result)
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the heliosim tests and scenarios into a report directory")
    parser.add_argument("--out", default=str(DEFAULT_OUT_ROOT), help="Report root (default: build/reports)")
    parser.add_argument("--profile", choices=sorted(PROFILES), default="smoke", help="Scenario workload")
    parser.add_argument("--skip-pytests", action="store_true", help="Skip the unit tests")
    parser.add_argument("--skip-sim", action="store_true", help="Skip the scenarios")
    parser.add_argument("--skip-examples", action="store_true", help="Skip the example script")
    args = parser.parse_args()

    out_root = Path(args.out)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%SZ")
    run_dir = out_root / stamp
    run_dir.mkdir(parents=True, exist_ok=True)

    meta = {"timestamp_utc": stamp, "python": sys.version, "commit": _git_commit(), "profile": args.profile}
    steps: dict[str, Any] = {}

    if not args.skip_pytests:
        junit = run_dir / "data" / "pytest-junit.xml"
        junit.parent.mkdir(parents=True, exist_ok=True)
        steps["pytest"] = {"exit_code": _run_logged(
            [sys.executable, "-m", "pytest", "-q", f"--junitxml={junit}", "tests"],
            run_dir / "logs" / "pytest.log",
        )}

    if not args.skip_sim:
        try:
            results = _run_scenarios(run_dir, args.profile)
            steps["scenarios"] = {"ok": True, "ran": list(results)}
        except Exception as e:
            (run_dir / "logs").mkdir(parents=True, exist_ok=True)
            (run_dir / "logs" / "scenario_error.log").write_text(repr(e) + "\n", encoding="utf-8")
            steps["scenarios"] = {"ok": False, "error": repr(e)}

    if not args.skip_examples:
        steps["examples"] = {"exit_code": _run_logged(
            [sys.executable, "-m", "heliosim.examples.run_simulation", "--all"],
            run_dir / "logs" / "examples.log",
        )}

    _dump(run_dir / "summary.json", {"meta": meta, "steps": steps})
    report = [f"heliosim validation report {stamp} ({args.profile})", f"Output: {run_dir}", ""]
    report += [f"- {step}: {outcome}" for step, outcome in steps.items()]
    (run_dir / "summary.txt").write_text("\n".join(report) + "\n", encoding="utf-8")

    latest_dir = out_root / "latest"
    if latest_dir.exists():
        shutil.rmtree(latest_dir)
    shutil.copytree(run_dir, latest_dir)

    failed = any(s.get("exit_code", 0) != 0 or s.get("ok") is False for s in steps.values())
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
