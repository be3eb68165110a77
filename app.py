#!/usr/bin/env python3
"""
Soil Condition Analysis - Main Application
==========================================
"""

import sys
import os
import json
import argparse
from datetime import datetime, timedelta

# Ensure src is in python path
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from soil_mon.config import load_config
from soil_mon.errors import NoDataError, InvalidInputError
from soil_mon.data.scenes import (
    Location,
    get_bbox,
    parse_scene,
    summarize_scenes,
    validate_coordinates,
    validate_date_range,
)
from soil_mon.data.synthetic import generate_mock_scenes
from soil_mon.engine import analyze_soil, as_dict
from soil_mon.visualization.reports import generate_report


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Soil condition analysis from Sentinel-2 reflectance")
    parser.add_argument("--lat", type=float, required=True, help="Latitude (WGS84)")
    parser.add_argument("--lon", type=float, required=True, help="Longitude (WGS84)")
    parser.add_argument("--start", type=str, help="Window start date (YYYY-MM-DD). Default: 30 days ago")
    parser.add_argument("--end", type=str, help="Window end date (YYYY-MM-DD). Default: today")
    parser.add_argument("--scenes", type=str,
                        help="JSON file with a list of scene records; synthetic scenes are used if omitted")
    parser.add_argument("--seed", type=int, help="Seed for synthetic scenes")
    parser.add_argument("--max-cloud", type=float, help="Preferred maximum cloud cover (percent)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON instead of a report")
    parser.add_argument("--plot", type=str, help="Save a summary figure to this path")
    return parser.parse_args(argv)


def load_scenes(path):
    """Reads scene records from a JSON file (a list, or {"scenes": [...]})."""
    try:
        with open(path) as f:
            payload = json.load(f)
    except OSError as e:
        raise InvalidInputError(f"Cannot read scenes file {path}: {e}")
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Scenes file {path} is not valid JSON: {e}")
    if isinstance(payload, dict):
        payload = payload.get("scenes", [])
    if not isinstance(payload, list):
        raise InvalidInputError(f"Scenes file {path} must hold a list of scene records")
    return [parse_scene(record) for record in payload]


def run(args, environ=None):
    """Runs one analysis. Returns the process exit code."""
    config = load_config(environ)
    if args.max_cloud is not None:
        config = config._replace(max_cloud_cover=args.max_cloud)

    validate_coordinates(args.lat, args.lon)
    today = datetime.now().date()
    start = args.start or (today - timedelta(days=30)).isoformat()
    end = args.end or today.isoformat()
    start_date, end_date = validate_date_range(start, end, today=today)

    location = Location(lat=args.lat, lon=args.lon)

    if args.scenes:
        scenes = load_scenes(args.scenes)
        source = args.scenes
    else:
        scenes = generate_mock_scenes(location, start_date, end_date, seed=args.seed, include_metadata=True)
        source = "Mock Sentinel-2 Data"

    summary = summarize_scenes(scenes)
    summary["data_source"] = source
    summary["area_of_interest"] = get_bbox(args.lat, args.lon)

    result = analyze_soil(scenes, location, config=config)

    used = next(s for s in scenes if s.id == result.scene_used)
    if used.metadata:
        summary["scene_metadata"] = used.metadata

    if args.json:
        print(json.dumps({"summary": summary, "analysis": as_dict(result)}, indent=2))
    else:
        generate_report(result, summary=summary)

    if args.plot:
        from soil_mon.visualization.plots import plot_analysis_summary
        plot_analysis_summary(result, title=f"Soil Analysis: {args.lat}, {args.lon}", save_path=args.plot)

    return 0


def main(argv=None):
    args = parse_arguments(argv)
    try:
        return run(args)
    except NoDataError as e:
        print(f"No analysis possible: {e}", file=sys.stderr)
        return 1
    except InvalidInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
