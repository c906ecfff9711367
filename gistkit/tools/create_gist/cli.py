#!/usr/bin/env python3
"""Command-line interface for creating GitHub gists."""

import argparse
import logging
import sys
from pathlib import Path

from gistkit.libs.config_loader import load_all_configs, load_configs
from gistkit.libs.content_collector import EditorSelection, FileList, SingleFile, is_action_available
from gistkit.libs.errors import GistError
from gistkit.tools.create_gist.creator import GistCreator
from gistkit.tools.create_gist.payload import dump_gist_request

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
LOG = logging.getLogger(__name__)


def build_source(args):
    """Turn CLI arguments into a selection source (None if nothing was selected)."""
    if args.stdin:
        text = sys.stdin.read()
        return EditorSelection(text=None, file_name_hint=args.name, document_text=text)
    if len(args.paths) == 1:
        return SingleFile(args.paths[0])
    if args.paths:
        return FileList.of(args.paths)
    return None


def build_parser():
    parser = argparse.ArgumentParser(
        description='Create a GitHub gist from files, directories, or standard input',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  create-gist notes.md
  create-gist src/ README.md -d "Parser prototype" --private
  git diff | create-gist --stdin --name change.diff --anonymous

  Files inside directories are named after their parent directories,
  joined with underscores: src/util/io.py is uploaded as src_util_io.py
        """
    )
    parser.add_argument(
        'paths',
        nargs='*',
        type=Path,
        help='Files or directories to upload'
    )
    parser.add_argument(
        '--stdin',
        action='store_true',
        help='Upload text read from standard input instead of files'
    )
    parser.add_argument(
        '--name', '-n',
        help='File name for text read from standard input'
    )
    parser.add_argument(
        '--description', '-d',
        default='',
        help='Gist description'
    )
    parser.add_argument(
        '--private', '-p',
        action='store_true',
        default=None,
        help='Create a secret gist (default: gist.public_by_default from config)'
    )
    parser.add_argument(
        '--anonymous', '-a',
        action='store_true',
        help='Post without a GitHub token'
    )
    parser.add_argument(
        '--open', '-o',
        action='store_true',
        default=None,
        help='Open the created gist in a web browser'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the request body instead of creating the gist'
    )
    parser.add_argument(
        '--config', '-c',
        action='append',
        help='YAML config file (repeatable; default: all files in config/)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser


def main(argv=None):
    """Main entry point for the create-gist command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.stdin and args.paths:
        parser.error('--stdin cannot be combined with paths')

    try:
        source = build_source(args)
        if not is_action_available(source):
            LOG.error("Nothing selected: pass files or directories, or use --stdin")
            sys.exit(1)

        for path in args.paths:
            if not path.exists():
                LOG.error(f"Path not found: {path}")
                sys.exit(1)

        config = load_configs(*args.config) if args.config else load_all_configs()
        creator = GistCreator(config=config, show_progress=len(args.paths) > 1)

        overrides = {'description': args.description, 'anonymous': args.anonymous}
        if args.private is not None:
            overrides['is_private'] = args.private
        if args.open is not None:
            overrides['open_in_browser'] = args.open
        options = creator.default_options(**overrides)

        with creator.client:
            if args.dry_run:
                request = creator.prepare(source, options)
                print(dump_gist_request(request.payload))
                return
            result = creator.create(source, options)

        if result.warning:
            LOG.warning(result.warning)
            for path in result.unreadable_files:
                LOG.warning(f"  - {path}")
        print(result.url)

    except GistError as e:
        LOG.error(f"Can't create Gist: {e}", exc_info=args.verbose)
        sys.exit(1)


if __name__ == '__main__':
    main()
