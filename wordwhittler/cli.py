"""
WordWhittler command line.

    wordwhittler lookup bank
    wordwhittler reduce --output phrases.json
    wordwhittler check draft.txt
    wordwhittler metrics draft.txt
    wordwhittler status
    wordwhittler serve --port 5050
"""

import argparse
import json
import sys
from pathlib import Path

from .config_logging import DEFAULT_PORT, WhittlerError, get_logger

logger = get_logger('wordwhittler.cli')


def _emit(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _read_text(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    return Path(path).read_text(encoding='utf-8')


def cmd_lookup(args):
    from .lexical import get_panel

    panel = get_panel()
    panel.set_word_of_interest(args.word)
    if panel.error:
        _emit({'success': False, 'error': panel.error})
        return 1
    _emit(panel.to_dict())
    return 0


def cmd_reduce(args):
    from .lexical import get_store, reduce_all

    mapping = reduce_all(get_store()).to_dict()
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(mapping, f, indent=2, ensure_ascii=False)
        _emit({'success': True, 'count': len(mapping), 'output': args.output})
        return 0

    items = list(mapping.items())
    if args.limit is not None:
        items = items[:args.limit]
    _emit({'success': True, 'count': len(mapping), 'phrases': dict(items)})
    return 0


def cmd_check(args):
    from .languagetool import describe, get_checker

    text = _read_text(args.file)
    result = get_checker().check(text)
    data = result.to_dict()
    data['labels'] = [describe(text, m) for m in result.matches]
    _emit(data)
    return 0 if result.success else 1


def cmd_metrics(args):
    from .metrics import compute

    rows = compute(_read_text(args.file))
    _emit({'success': True, 'rows': [row.to_dict() for row in rows]})
    return 0


def cmd_status(args):
    from . import get_status

    _emit(get_status())
    return 0


def cmd_serve(args):
    from .app import create_app

    app = create_app()
    logger.info("Starting server", host=args.host, port=args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='wordwhittler',
                                     description='WordWhittler writing aid')
    subparsers = parser.add_subparsers(dest='command')

    lookup_p = subparsers.add_parser('lookup', help='Show the lookup tree for a word')
    lookup_p.add_argument('word', help='Word or phrase to look up')
    lookup_p.set_defaults(func=cmd_lookup)

    reduce_p = subparsers.add_parser('reduce', help='Run the phrase reduction over the lexicon')
    reduce_p.add_argument('--output', help='Write the phrase mapping to this JSON file')
    reduce_p.add_argument('--limit', type=int, help='Print at most this many phrases')
    reduce_p.set_defaults(func=cmd_reduce)

    check_p = subparsers.add_parser('check', help='Grammar-check a text file')
    check_p.add_argument('file', help="Text file ('-' for stdin)")
    check_p.set_defaults(func=cmd_check)

    metrics_p = subparsers.add_parser('metrics', help='Show the info table for a text file')
    metrics_p.add_argument('file', help="Text file ('-' for stdin)")
    metrics_p.set_defaults(func=cmd_metrics)

    status_p = subparsers.add_parser('status', help='Show integration status')
    status_p.set_defaults(func=cmd_status)

    serve_p = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_p.add_argument('--host', default='127.0.0.1', help='Bind address')
    serve_p.add_argument('--port', type=int, default=DEFAULT_PORT, help='Port')
    serve_p.add_argument('--debug', action='store_true', help='Flask debug mode')
    serve_p.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except WhittlerError as e:
        _emit(e.to_dict())
        return 1
    except OSError as e:
        _emit({'success': False, 'error': {'code': 'IO_ERROR', 'message': str(e)}})
        return 1


if __name__ == '__main__':
    sys.exit(main())
