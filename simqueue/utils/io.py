"""Saving and loading simulation output."""
import json
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd
import yaml

PathLike = Union[str, Path]


def save_results(results: Dict[str, Any], file_path: PathLike) -> Path:
    """Save a results dictionary as YAML or JSON, chosen by file suffix."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        if path.suffix == '.json':
            json.dump(results, f, indent=2)
        else:
            yaml.safe_dump(results, f, default_flow_style=False, sort_keys=False)

    return path


def load_results(file_path: PathLike) -> Dict[str, Any]:
    """Load a results file written by ``save_results``."""
    path = Path(file_path)
    with open(path, 'r') as f:
        if path.suffix == '.json':
            return json.load(f)
        return yaml.safe_load(f)


def save_trace(trace: Dict[str, Any], output_dir: PathLike) -> Dict[str, Path]:
    """Write a recorded trace as CSV files.

    Args:
        trace: Output of ``MetricsCollector.get_trace``
        output_dir: Directory for ``timeline.csv`` and ``processes.csv``

    Returns:
        Mapping of table name to written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = {}

    timeline = pd.DataFrame(trace.get('timeline', {}),
                            columns=['timestamps', 'queue_length', 'server_busy'])
    timeline = timeline.rename(columns={'timestamps': 'time'})
    written['timeline'] = output_dir / "timeline.csv"
    timeline.to_csv(written['timeline'], index=False)

    processes = pd.DataFrame(trace.get('processes', []),
                             columns=['process_id', 'arrival_time', 'service_start',
                                      'departure_time'])
    processes['wait_time'] = processes['service_start'] - processes['arrival_time']
    processes['turnaround_time'] = processes['departure_time'] - processes['arrival_time']
    written['processes'] = output_dir / "processes.csv"
    processes.to_csv(written['processes'], index=False)

    return written
