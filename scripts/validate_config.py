#!/usr/bin/env python
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.config_loader import init_config_loader, ConfigurationError
from utils.logger import setup_logger

logger = setup_logger(__name__)


def validate_configuration(config_path=None):
    print("\n" + "=" * 80)
    print(" Market Recommendations Configuration Validator")
    print("=" * 80 + "\n")

    try:
        loader = init_config_loader(config_path)
    except ConfigurationError as e:
        print(f"[ERROR] {e}\n")
        return False

    config = loader.load()
    rec = config.get('recommendation', {})

    print("[INFO] All validation checks passed\n")
    print("Configuration Summary:")
    print("-" * 80)
    print(f"  Server:             {config.get('server', {}).get('host')}:{config.get('server', {}).get('port')}")
    print(f"  Shop window:        {rec.get('shop', {}).get('history_window')}")
    print(f"  Food window:        {rec.get('food', {}).get('history_window')}")
    print(f"  Limit:              default {rec.get('default_limit')}, max {rec.get('max_limit')}")
    print(f"  Prometheus:         {config.get('observability', {}).get('enable_prometheus')}")
    print(f"  Log Level:          {config.get('observability', {}).get('log_level')}")
    print("-" * 80 + "\n")

    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(0 if validate_configuration(path) else 1)
