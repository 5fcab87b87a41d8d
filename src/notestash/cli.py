"""Command-line interface for notestash."""


import argparse
import json
import logging
import os.path
import sys
from terminaltables import AsciiTable
from notestash.conf import RepoConf, ServerConf
from notestash.logging_setup import setup_logging


logger = logging.getLogger(__name__)


def _first_line(text: str, limit: int = 40) -> str:
    line = text.strip().splitlines()[0] if text.strip() else ''
    return line if len(line) <= limit else line[:limit - 3] + '...'


def _serve(args, conf: ServerConf) -> int:
    app = conf.instantiate()
    logger.info('Server is running on http://%s:%s', conf.host, conf.port)
    app.run(host=conf.host, port=conf.port, threaded=True)
    return 0


def _ls(args, conf: ServerConf) -> int:
    with conf.repo_conf.instantiate() as repo:
        notes = repo.list()
    if args.json:
        print(json.dumps([n.as_json() for n in notes]))
    elif args.table:
        data = [('Name', 'Size', 'First line')]
        data.extend((n.name, str(len(n.text)), _first_line(n.text)) for n in notes)
        table = AsciiTable(data)
        table.justify_columns[1] = 'right'
        print(table.table)
    else:
        for note in notes:
            print(note.name)
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='notestash')
    parser.set_defaults(func=None)

    subs = parser.add_subparsers(title='Commands')

    p_serve = subs.add_parser('serve', add_help=False,
                              help='Serve the notes in a directory over HTTP. Each note is stored as a file in '
                                   'the cache directory, named after the note.')
    p_serve.add_argument('--help', action='help', help='Show this help message and exit.')
    p_serve.add_argument('-h', '--host', nargs=1, required=True, help='Server address.')
    p_serve.add_argument('-p', '--port', nargs=1, required=True, type=int, help='Server port.')
    p_serve.add_argument('-c', '--cache', nargs=1, required=True,
                         help='Path to the directory the notes are stored in. It must already exist.')
    p_serve.add_argument('-v', '--verbose', action='store_true', help='Log every request to the repo.')
    p_serve.set_defaults(func=_serve)

    p_ls = subs.add_parser('ls', help='List the notes in a directory.')
    p_ls.add_argument('-c', '--cache', nargs=1, required=True, help='Path to the directory the notes are stored in.')
    p_ls_formats = p_ls.add_mutually_exclusive_group()
    p_ls_formats.add_argument('-j', '--json', action='store_true',
                              help='Output as JSON. The output is an array of objects with "name" and "text" keys.')
    p_ls_formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')
    p_ls.set_defaults(func=_ls, verbose=False)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 1
    setup_logging(args.verbose)
    cache = args.cache[0]
    if not os.path.isdir(cache):
        print(f'Cache directory does not exist: {cache}', file=sys.stderr)
        return 1
    conf = ServerConf(RepoConf(cache))
    if args.func is _serve:
        conf.host = args.host[0]
        conf.port = args.port[0]
    return args.func(args, conf.standardize())
