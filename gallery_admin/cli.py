"""
Command line access to the gallery media library.

Usage:
    gallery-admin login EMAIL
    gallery-admin media list [--artist ID] [--folder NAME] [--date today|week|month] [--sort date_desc]
    gallery-admin media upload FILE... [--alt TEXT] [--credit TEXT] [--folder NAME] [--artist ID]
    gallery-admin media alt ID TEXT
    gallery-admin media delete ID
    gallery-admin media folders
    gallery-admin artists list [--search TEXT]
    gallery-admin artworks set-media ID MEDIA_ID...
"""
from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from gallery_admin.core.config import settings
from gallery_admin.core.exceptions import GalleryException
from gallery_admin.core.http import ApiClient, Credentials
from gallery_admin.models.schemas import (
    DateFilter,
    MediaFilterParams,
    MediaItem,
    MediaUploadMetadata,
    PaginationParams,
    PickerFilters,
    SortBy,
)
from gallery_admin.repositories import ArtistRepository, ArtworkRepository, AuthRepository, MediaRepository
from gallery_admin.services import MediaLibraryService, prepare_uploads
from gallery_admin.services.picker_service import configured_clock
from gallery_admin.services.filter_service import visible_media

console = Console()
logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def media_table(items: Sequence[MediaItem], title: str = "Media") -> Table:
    table = Table(title=f"[bold]{title}[/bold]")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Filename")
    table.add_column("Alt", style="dim")
    table.add_column("Artist", style="magenta")
    table.add_column("Folder")
    table.add_column("Created", justify="right", style="green")

    for item in items:
        table.add_row(
            item.id,
            item.filename,
            item.alt or "",
            item.artist_name or "",
            item.folder or "",
            item.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


async def cmd_login(api: ApiClient, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    response = await AuthRepository(api).login(args.email, password)
    console.print(f"[green]✓[/green] Logged in as {response.user.email} ({response.user.role})")
    console.print("Export the token to use the other commands:")
    console.print(f"  export API_TOKEN={response.token}")
    return 0


async def cmd_media_list(api: ApiClient, args: argparse.Namespace) -> int:
    library = MediaLibraryService(MediaRepository(api))
    items = await library.load(
        PaginationParams(page=args.page, per_page=args.per_page),
        MediaFilterParams(folder=args.folder, artist_id=args.artist),
    )
    filters = PickerFilters(date_filter=args.date, sort_by=args.sort)
    shown = visible_media(items, filters, configured_clock()())

    if not items:
        console.print("[yellow]No media. Upload images to get started.[/yellow]")
    elif not shown:
        console.print("[yellow]No media match these filters.[/yellow]")
    else:
        console.print(media_table(shown, title=f"Media ({len(shown)} of {len(items)})"))
    return 0


async def cmd_media_folders(api: ApiClient, args: argparse.Namespace) -> int:
    folders = await MediaLibraryService(MediaRepository(api)).folders()
    if not folders:
        console.print("[yellow]No folders[/yellow]")
    for folder in folders:
        console.print(folder)
    return 0


async def cmd_media_upload(api: ApiClient, args: argparse.Namespace) -> int:
    files = prepare_uploads(args.files)
    if not files:
        console.print("[red]Nothing to upload[/red]")
        return 1

    metadata = MediaUploadMetadata(
        alt=args.alt,
        credit=args.credit,
        folder=args.folder,
        artist_id=args.artist,
    )
    library = MediaLibraryService(MediaRepository(api))
    with console.status(f"Uploading {len(files)} file(s)..."):
        result = await library.upload(files, metadata)

    for item in result.uploaded:
        console.print(f"[green]✓[/green] {item.filename} → {item.id}")
    for filename, reason in result.failed:
        console.print(f"[red]✗[/red] {filename}: {reason}")

    skipped = len(args.files) - len(files)
    if skipped:
        console.print(f"[yellow]⚠ {skipped} file(s) skipped before upload[/yellow]")
    return 0 if result.ok and not skipped else 1


async def cmd_media_alt(api: ApiClient, args: argparse.Namespace) -> int:
    item = await MediaLibraryService(MediaRepository(api)).update_alt(args.id, args.text)
    console.print(f"[green]✓[/green] {item.filename}: alt = {item.alt or '(none)'}")
    return 0


async def cmd_media_delete(api: ApiClient, args: argparse.Namespace) -> int:
    if not args.yes:
        answer = console.input(f"Delete media {args.id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            console.print("Aborted")
            return 1
    await MediaLibraryService(MediaRepository(api)).delete(args.id)
    console.print(f"[green]✓[/green] Deleted {args.id}")
    return 0


async def cmd_artists_list(api: ApiClient, args: argparse.Namespace) -> int:
    artists = await ArtistRepository(api).list_artists(
        args.search,
        PaginationParams(page=args.page, per_page=args.per_page),
    )
    table = Table(title="[bold]Artists[/bold]")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Slug", style="dim")
    table.add_column("Published", justify="center")
    for artist in artists:
        table.add_row(artist.id, artist.name, artist.slug, "✓" if artist.published else "")
    console.print(table)
    return 0


async def cmd_artworks_set_media(api: ApiClient, args: argparse.Namespace) -> int:
    artwork = await ArtworkRepository(api).set_media(args.id, args.media_ids)
    console.print(f"[green]✓[/green] {artwork.title}: {len(artwork.media)} image(s)")
    for position, item in enumerate(artwork.media, start=1):
        console.print(f"  {position}. {item.filename} ({item.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gallery-admin", description="Manage the gallery media library")
    parser.add_argument("--api", default=None, help="API base URL (default from API_BASE_URL)")
    parser.add_argument("--token", default=None, help="Bearer token (default from API_TOKEN)")
    parser.add_argument("--debug", action="store_true", help="Show debug output")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and print a token")
    login.add_argument("email")
    login.add_argument("--password", default=None, help="Prompted for when omitted")
    login.set_defaults(handler=cmd_login)

    media = commands.add_parser("media", help="Media library").add_subparsers(dest="media_command", required=True)

    media_list = media.add_parser("list", help="List media")
    media_list.add_argument("--artist", default=None, help="Artist id")
    media_list.add_argument("--folder", default=None, help="Folder name")
    media_list.add_argument("--date", default=DateFilter.ALL.value, choices=[f.value for f in DateFilter])
    media_list.add_argument("--sort", default=SortBy.DATE_DESC.value, choices=[s.value for s in SortBy])
    media_list.add_argument("--page", type=int, default=1)
    media_list.add_argument("--per-page", type=int, default=settings.media_page_size)
    media_list.set_defaults(handler=cmd_media_list)

    media_folders = media.add_parser("folders", help="List folders")
    media_folders.set_defaults(handler=cmd_media_folders)

    media_upload = media.add_parser("upload", help="Upload images")
    media_upload.add_argument("files", nargs="+", type=Path)
    media_upload.add_argument("--alt", default=None)
    media_upload.add_argument("--credit", default=None)
    media_upload.add_argument("--folder", default=None)
    media_upload.add_argument("--artist", default=None, help="Artist id")
    media_upload.set_defaults(handler=cmd_media_upload)

    media_alt = media.add_parser("alt", help="Set the alternative text")
    media_alt.add_argument("id")
    media_alt.add_argument("text")
    media_alt.set_defaults(handler=cmd_media_alt)

    media_delete = media.add_parser("delete", help="Delete a media item")
    media_delete.add_argument("id")
    media_delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    media_delete.set_defaults(handler=cmd_media_delete)

    artists = commands.add_parser("artists", help="Artists").add_subparsers(dest="artists_command", required=True)
    artists_list = artists.add_parser("list", help="List artists")
    artists_list.add_argument("--search", default=None)
    artists_list.add_argument("--page", type=int, default=1)
    artists_list.add_argument("--per-page", type=int, default=settings.artist_page_size)
    artists_list.set_defaults(handler=cmd_artists_list)

    artworks = commands.add_parser("artworks", help="Artworks").add_subparsers(dest="artworks_command", required=True)
    artworks_media = artworks.add_parser("set-media", help="Replace the images of an artwork, in the given order")
    artworks_media.add_argument("id")
    artworks_media.add_argument("media_ids", nargs="+", metavar="MEDIA_ID")
    artworks_media.set_defaults(handler=cmd_artworks_set_media)

    return parser


async def run(args: argparse.Namespace) -> int:
    token = args.token or settings.api_token
    async with ApiClient(base_url=args.api, credentials=Credentials(token)) as api:
        try:
            return await args.handler(api, args)
        except GalleryException as e:
            console.print(f"[red]{e.message}[/red]")
            return 1
        except ValidationError as e:
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "value"
                console.print(f"[red]Invalid {field}: {error['msg']}[/red]")
            return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
