import argparse
import json
import logging
from pathlib import Path

from eaglet.config import CheckerConfig
from eaglet.pipeline import CheckingPipeline


def main():
    parser = argparse.ArgumentParser(description="Check entity-linking annotations.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to checker config JSON file.",
    )
    parser.add_argument(
        "--input",
        type=str,
        nargs="+",
        required=True,
        help="Input document files.",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Optional JSONL output path.",
    )
    parser.add_argument(
        "--log",
        type=str,
        default="WARNING",
        help="Logging level.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log.upper())

    config_data = json.loads(Path(args.config).read_text(encoding="utf-8"))
    config = CheckerConfig.from_dict(config_data)

    pipeline = CheckingPipeline(config)
    try:
        results = pipeline.run(args.input, output_path=args.output)
    finally:
        pipeline.close()

    if not args.output:
        for result in results:
            print(json.dumps(result))


if __name__ == "__main__":
    main()
