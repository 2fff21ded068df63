"""Example: use the engine directly (no API layer).

Reads DB settings from the environment / .env like the service would.
"""

import json
import sys

from compliance_engine.main import create_engine


def main(argv):
    worker_id = int(argv[1]) if len(argv) > 1 else 1
    team_id = int(argv[2]) if len(argv) > 2 else 1
    start, end = (argv[3], argv[4]) if len(argv) > 4 else ("2025-01-01", "2025-01-31")

    engine = create_engine()
    print(json.dumps(engine.compute_performance(worker_id, start, end).to_dict(), indent=2))
    print(json.dumps(engine.compute_team_grade(team_id, start, end).to_dict(), indent=2))
    print(json.dumps(engine.derive_streak(worker_id).to_dict(), indent=2))
    print(json.dumps([a.to_dict() for a in engine.detect_anomalies(team_id)], indent=2))


if __name__ == "__main__":
    main(sys.argv)
