"""
Sound Whiskers CLI - Command Line Interface

Generate AI playlists, create playlists and list them from a terminal,
using the same workflows as the web client.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from . import __version__
from .client import PlaylistApiClient
from .config import SoundWhiskersConfig
from .exceptions import ApiError, ValidationError
from .gateway import RemoteActionGateway
from .logger import setup_logging
from .models import CreatePlaylistCommand, GeneratePlaylistCommand, GenerationPreview, PlaylistPage
from .notifications import LoggingNotificationSink, NotificationSink
from .workflows import ApprovalWorkflow, CreationWorkflow, GenerationWorkflow

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="sound-whiskers",
        description="Create and manage Sound Whiskers playlists",
        epilog='Example: sound-whiskers generate "upbeat running mix" --approve',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--api-url",
        type=str,
        metavar="URL",
        help="Service base URL (default: $SOUND_WHISKERS_API_URL)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a playlist preview with AI")
    generate.add_argument("prompt", help="Describe the mood, theme or occasion")
    generate.add_argument(
        "--approve",
        action="store_true",
        help="Save the generated preview as a playlist",
    )
    generate.add_argument(
        "--not-pro",
        action="store_true",
        help="Treat the account as a free plan account",
    )

    create = subparsers.add_parser("create", help="Create an empty playlist")
    create.add_argument("name", help="Playlist name")
    create.add_argument("--description", help="Playlist description")

    listing = subparsers.add_parser("list", help="List playlists")
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--page-size", type=int, default=10)
    listing.add_argument("--search", help="Filter playlists by name")

    return parser


def display_preview(preview: GenerationPreview) -> None:
    print()
    print("=" * 70)
    print(preview.playlist_name or "AI Generated Playlist")
    print("=" * 70)
    if preview.playlist_description:
        print(preview.playlist_description)
        print()
    for position, track in enumerate(preview.items, 1):
        print(f"{position:>3}. {track.artist} - {track.title} ({track.album})")
    print("=" * 70)
    print(f"Tracks: {preview.count}")
    print()


def display_playlists(page: PlaylistPage) -> None:
    print()
    print(f"Playlists (page {page.page}, {len(page.items)} of {page.total})")
    print("-" * 70)
    for playlist in page.items:
        print(f"{playlist.id}  {playlist.name}")
    print()


def display_error(error: Exception) -> None:
    """
    Display error message with appropriate context.

    Args:
        error: Exception that occurred
    """
    print()
    if isinstance(error, ValidationError):
        print(f"Invalid input: {error}")
    elif isinstance(error, ApiError):
        print(f"API error ({error.status or 'no response'}): {error.message}")
    elif isinstance(error, EnvironmentError):
        print(f"Configuration error: {error}")
    else:
        print(f"Unexpected error: {error}")
        print("Please check the logs for more details.")
    print()


async def run_generate(
    args: argparse.Namespace,
    config: SoundWhiskersConfig,
    gateway: RemoteActionGateway,
    sink: NotificationSink,
) -> int:
    command = GeneratePlaylistCommand(prompt=args.prompt)
    generation = GenerationWorkflow(gateway, sink, is_pro=config.is_pro and not args.not_pro)

    preview = await generation.generate(command.prompt)
    if preview is None:
        return 1
    display_preview(preview)

    if not args.approve:
        return 0

    client = PlaylistApiClient(gateway)
    approval = ApprovalWorkflow(
        create_playlist=client.create_playlist,
        add_tracks=client.add_tracks,
        notifier=sink,
        on_reset=generation.reset,
    )
    playlist = await approval.approve(preview)
    if playlist is None:
        return 1
    print(f"Saved playlist {playlist.id}")
    return 0


async def run_create(
    args: argparse.Namespace,
    gateway: RemoteActionGateway,
    sink: NotificationSink,
) -> int:
    command = CreatePlaylistCommand(name=args.name, description=args.description)
    client = PlaylistApiClient(gateway)
    creation = CreationWorkflow(client.create_playlist, sink)

    playlist = await creation.create(command)
    if playlist is None:
        return 1
    print(f"Created playlist {playlist.id}")
    return 0


async def run_list(args: argparse.Namespace, gateway: RemoteActionGateway) -> int:
    client = PlaylistApiClient(gateway)
    page = await client.list_playlists(
        page=args.page, page_size=args.page_size, search=args.search
    )
    display_playlists(page)
    return 0


async def async_main(args: argparse.Namespace, config: Optional[SoundWhiskersConfig] = None) -> int:
    """
    Async main function.

    Args:
        args: Parsed CLI arguments
        config: Preloaded configuration (loaded from the environment if omitted)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        if config is None:
            config = SoundWhiskersConfig.from_environment(api_url=args.api_url)
        sink = LoggingNotificationSink()

        async with RemoteActionGateway(config) as gateway:
            if args.command == "generate":
                exit_code = await run_generate(args, config, gateway, sink)
            elif args.command == "create":
                exit_code = await run_create(args, gateway, sink)
            else:
                exit_code = await run_list(args, gateway)

        return exit_code

    except (ValidationError, ApiError, EnvironmentError, ValueError) as e:
        display_error(e)
        if args.verbose:
            logger.exception("Detailed error traceback:")
        return 1


def main() -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    try:
        return asyncio.run(async_main(args))
    except KeyboardInterrupt:
        print()
        print("Cancelled by user")
        return 1
    except Exception:
        logger.exception("Fatal error in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
