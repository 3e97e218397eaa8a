"""
CLI interface for the scanner test payload generator.

Usage:
    python -m scanbench [--seed N] [--json] [--visible-gs] <command> ...

Commands:
    dm [GTIN]                  DataMatrix payload (next demo GTIN if omitted)
    weight PREFIX PLU GRAMS    Weight barcode (77, 49, 22)
    gs1 GOODS_ID               GS1 pack payload
    simple VALUE               Linear barcode value
    config CONFIG_ID F=V ...   Config-driven fixed-width barcode
    extract PAYLOAD            GTIN of a DataMatrix payload as EAN-13
    corrupt PAYLOAD            Damaged copy for negative testing
    rotate GTIN ...            Scripted carousel playback
"""

import argparse
import json
import logging
import random
import sys
from typing import Any, Dict, List, Optional

from .constants import GS_CHAR, GS_VISIBLE
from .encoders import (
    encode_data_matrix,
    encode_from_field_config,
    encode_gs1,
    encode_simple,
    encode_weight_barcode,
    extract_gtin_as_ean13,
    FIELD_CONFIGS,
    TEMPLATES,
)
from .errors import ScanBenchError
from .models import BarcodeFormat, ProductType
from .mutator import corrupt_with_report, CorruptionMethod
from .rotation import DoubleScanMode, ManualTimer, RotationController
from .settings import load_settings
from .sources import DemoSequence, propose_datamatrix_items


def show(payload: Optional[str], visible_gs: bool) -> Optional[str]:
    """Render group separators as <GS> for terminals."""
    if payload is None or not visible_gs:
        return payload
    return payload.replace(GS_CHAR, GS_VISIBLE)


def read_payload(text: str) -> str:
    """Accept <GS> typed on the command line as the real separator."""
    return text.replace(GS_VISIBLE, GS_CHAR)


def parse_field_values(pairs: List[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected FIELD=VALUE, got {pair!r}")
        values[name.strip()] = value.strip()
    return values


def cmd_dm(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    gtin = args.gtin or DemoSequence().next_value()
    result = encode_data_matrix(gtin, args.template or settings["default_template"], rng)
    return {
        'payload': result.payload,
        'format': BarcodeFormat.DATAMATRIX.value,
        'gtin': result.gtin,
        'template': result.template_name,
        'ean13': extract_gtin_as_ean13(result.payload),
    }


def cmd_weight(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    result = encode_weight_barcode(args.prefix, args.plu, args.grams, args.discount)
    return {'payload': result.payload, 'format': result.format.value}


def cmd_gs1(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    payload = encode_gs1(
        args.goods_id,
        args.type,
        quantity=args.quantity,
        weight=args.weight,
        discount=args.discount,
        unique_id=args.unique_id,
        decimal_position=args.decimal_position,
        rng=rng,
    )
    return {'payload': payload, 'format': BarcodeFormat.QRCODE.value}


def cmd_simple(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    result = encode_simple(args.value, args.type)
    return {'payload': result.payload, 'format': result.format.value}


def cmd_config(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    values = parse_field_values(args.fields)
    payload = encode_from_field_config(args.config_id, values, args.simulate_error, rng)
    output: Dict[str, Any] = {'payload': payload}
    if payload is None:
        output['_error'] = "Cannot build code: unknown config or a field is too long"
    else:
        output['format'] = FIELD_CONFIGS[args.config_id].format.value
    return output


def cmd_extract(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    ean13 = extract_gtin_as_ean13(read_payload(args.payload))
    output: Dict[str, Any] = {'payload': ean13}
    if ean13 is None:
        output['_error'] = "No AI (01) GTIN found"
    else:
        output['format'] = BarcodeFormat.EAN13.value
    return output


def cmd_corrupt(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    result = corrupt_with_report(read_payload(args.payload), args.method, rng)
    output: Dict[str, Any] = {
        'payload': result.payload,
        'method': result.method.value if result.method else None,
    }
    if result.errors:
        output['_error'] = result.errors[0].message
    return output


def cmd_rotate(args, rng: random.Random, settings: Dict[str, Any]) -> Dict[str, Any]:
    batch = propose_datamatrix_items(args.gtins, args.template)
    controller = RotationController(settings=settings, timer_factory=ManualTimer, rng=rng)
    controller.select_double_scan(args.double_scan)

    entries = [controller.start(batch.items)]
    steps = args.steps if args.steps is not None else len(batch.items) + 1
    for _ in range(steps):
        entries.append(controller.next())
    controller.stop()

    return {
        'payload': entries[-1].payload,
        'steps': [entry.to_dict() for entry in entries],
        'skipped': [s.message for s in batch.skipped],
    }


COMMANDS = {
    'dm': cmd_dm,
    'weight': cmd_weight,
    'gs1': cmd_gs1,
    'simple': cmd_simple,
    'config': cmd_config,
    'extract': cmd_extract,
    'corrupt': cmd_corrupt,
    'rotate': cmd_rotate,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='scanbench',
        description='Generate barcode payloads for scanner and register testing'
    )
    parser.add_argument('--seed', type=int, default=None, help='Seed for repeatable random tails')
    parser.add_argument('--json', action='store_true', help='Output result as JSON')
    parser.add_argument('--visible-gs', action='store_true', help='Print group separators as <GS>')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    dm = sub.add_parser('dm', help='DataMatrix payload')
    dm.add_argument('gtin', nargs='?', default=None)
    dm.add_argument('--template', choices=sorted(TEMPLATES), default=None)

    weight = sub.add_parser('weight', help='Weight barcode')
    weight.add_argument('prefix')
    weight.add_argument('plu')
    weight.add_argument('grams', type=int)
    weight.add_argument('--discount', type=int, default=0)

    gs1 = sub.add_parser('gs1', help='GS1 pack payload')
    gs1.add_argument('goods_id')
    gs1.add_argument('--type', default=ProductType.PIECE.value)
    gs1.add_argument('--quantity', type=float, default=None)
    gs1.add_argument('--weight', type=int, default=None)
    gs1.add_argument('--discount', type=int, default=0)
    gs1.add_argument('--unique-id', default=None)
    gs1.add_argument('--decimal-position', type=int, default=None)

    simple = sub.add_parser('simple', help='Linear barcode value')
    simple.add_argument('value')
    simple.add_argument('--type', choices=[f.value for f in BarcodeFormat], default=BarcodeFormat.CODE128.value)

    config = sub.add_parser('config', help='Config-driven barcode')
    config.add_argument('config_id', choices=sorted(FIELD_CONFIGS))
    config.add_argument('fields', nargs='*', help='FIELD=VALUE pairs')
    config.add_argument('--simulate-error', action='store_true', help='Write a wrong check digit')

    extract = sub.add_parser('extract', help='GTIN of a DataMatrix payload as EAN-13')
    extract.add_argument('payload')

    broken = sub.add_parser('corrupt', help='Damage a payload')
    broken.add_argument('payload')
    broken.add_argument('--method', default=CorruptionMethod.REMOVE_CHARS.value)

    rotate = sub.add_parser('rotate', help='Scripted carousel playback')
    rotate.add_argument('gtins', nargs='+')
    rotate.add_argument('--steps', type=int, default=None, help='next() calls after start')
    rotate.add_argument('--template', choices=sorted(TEMPLATES), default=None)
    rotate.add_argument('--double-scan', choices=[m.value for m in DoubleScanMode], default=None)

    return parser


def format_text(output: Dict[str, Any], visible_gs: bool) -> str:
    if 'steps' in output:
        lines = []
        for step in output['steps']:
            line = f"[{step['counter']}] {show(step['display_payload'], visible_gs)}"
            if step['secondary']:
                line += f"  +  {show(step['secondary']['payload'], visible_gs)}"
            lines.append(line)
        return '\n'.join(lines)
    return show(output.get('payload'), visible_gs) or ''


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings["log_level"],
        format='%(levelname)s %(name)s: %(message)s',
    )
    rng = random.Random(args.seed)

    try:
        output = COMMANDS[args.command](args, rng, settings)
    except (ScanBenchError, argparse.ArgumentTypeError) as e:
        error_output = {
            "error": str(e),
            "code": getattr(getattr(e, "code", None), "value", None),
        }
        if args.json:
            print(json.dumps(error_output, ensure_ascii=False, indent=2))
        else:
            print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        if args.visible_gs and isinstance(output.get('payload'), str):
            output['payload'] = show(output['payload'], True)
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_text(output, args.visible_gs))

    return 1 if output.get('_error') else 0


if __name__ == '__main__':
    sys.exit(main())
