#!/usr/bin/env python3
"""Load one viewport from the data service and dump the joined result.

Prints every road with its matched value, colour and width, or the road and
heatmap layer payloads as JSON when ``--json`` is given.  With
``--play-hours N`` the script also runs playback for N ticks and prints a
summary line per loaded hour.

Usage
-----
::

    export ROADAIR_BASE_URL="http://localhost:8000"
    python scripts/dump_snapshot.py --width 1280 --height 720

Options::

    --lat / --lon        Viewport centre (default: configured initial view)
    --zoom Z             Zoom level (default: configured initial zoom)
    --width / --height   Viewport size in pixels (default: 1280x720)
    --time ISO           Time cursor, e.g. 2023-03-01T08:00 (UTC)
    --play-hours N       Run playback for N ticks after the first load
    --interval SECS      Playback tick interval (default: configured)
    --json               Output the road and heatmap layers as JSON
    --output FILE        Write JSON output to FILE instead of stdout
    --verbose / -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyroadair import AirMapClient, LoadStatus, RoadAirConfig, RoadAirError  # noqa: E402
from pyroadair.render import heatmap_layer, road_layer  # noqa: E402
from pyroadair.state import MapSnapshot  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _summarize(snapshot: MapSnapshot) -> str:
    values = list(snapshot.value_map.values())
    peak = max(values) if values else 0.0
    return (
        f"  {snapshot.time.isoformat()}  samples={len(snapshot.samples)}"
        f"  roads={len(snapshot.roads)}  matched={len(values)}  peak={peak:.3f}"
    )


def _print_roads(snapshot: MapSnapshot, out: list[str]) -> None:
    out.append(_section(f"ROADS  t={snapshot.time.isoformat()}  radius={snapshot.radius}m"))
    for road in snapshot.roads:
        value = snapshot.value_map.get(road.id)
        shown = "-" if value is None else f"{value:.3f}"
        name = road.properties.name or "?"
        color = snapshot.value_map.color_for(road.id)
        width = snapshot.value_map.width_for(road.id)
        out.append(f"  {road.id:<12} {name:<30} value={shown:<8} color={color} width={width:.1f}")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Dump a joined road/air-quality snapshot for one viewport.")
    parser.add_argument("--lat", type=float, help="Viewport centre latitude")
    parser.add_argument("--lon", type=float, help="Viewport centre longitude")
    parser.add_argument("--zoom", type=float, help="Zoom level")
    parser.add_argument("--width", type=int, default=1280, help="Viewport width in pixels")
    parser.add_argument("--height", type=int, default=720, help="Viewport height in pixels")
    parser.add_argument("--time", type=datetime.fromisoformat, help="Time cursor (ISO format, UTC)")
    parser.add_argument("--play-hours", type=int, default=0, help="Run playback for N ticks")
    parser.add_argument("--interval", type=float, help="Playback tick interval in seconds")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output the layer payloads as JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.interval is not None:
        overrides["playback_interval"] = args.interval
    try:
        config = RoadAirConfig.from_env(**overrides)
    except RoadAirError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    loaded: list[MapSnapshot] = []
    async with AirMapClient(config) as client:
        client.subscribe(loaded.append)
        if args.time is not None:
            client.set_time(args.time)
        client.set_viewport(
            latitude=args.lat,
            longitude=args.lon,
            zoom=args.zoom,
            pixel_width=args.width,
            pixel_height=args.height,
        )
        await client.wait_idle()

        if client.snapshot is None:
            # Background loads only log failures; retry once to surface the error.
            result = await client.refresh()
            if result is None or result.status != LoadStatus.APPLIED:
                error = result.error if result is not None else "viewport has no size"
                print(f"Load failed: {error}", file=sys.stderr)
                return 1

        if args.play_hours > 0:
            client.play()
            await asyncio.sleep(config.playback_interval * args.play_hours + config.playback_interval / 2)
            client.stop()
            await client.wait_idle()

        snapshot = client.snapshot
        assert snapshot is not None

    if args.json_mode:
        layers = {"roads": road_layer(snapshot), "heatmap": heatmap_layer(snapshot)}
        payload = json.dumps(layers, indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return 0

    out: list[str] = [_section("pyroadair dump_snapshot")]
    out.append(f"  base_url  : {config.base_url}")
    out.append(f"  centre    : {snapshot.latitude:.6f}, {snapshot.longitude:.6f}")
    out.append(_section("LOADS"))
    out.extend(_summarize(item) for item in loaded)
    _print_roads(snapshot, out)
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
