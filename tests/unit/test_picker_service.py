"""Unit tests for the media picker controllers."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from gallery_admin.core.exceptions import ApiConnectionException
from gallery_admin.core.http import ApiClient
from gallery_admin.models.schemas import ArtistChoice, DateFilter, EmptyState, MediaUploadMetadata, SortBy
from gallery_admin.repositories import MediaRepository
from gallery_admin.services.picker_service import MediaPicker, MultiMediaPicker
from tests.factories import MediaFactory
from tests.fakes import FakeArtistRepository, FakeMediaRepository, upload_file


class ChangeRecorder:
    """Collects on_change calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


@pytest.mark.asyncio
class TestPickerSession:
    """Test opening, loading and closing."""

    async def test_open_loads_catalog_and_artists(self, media_repo, artist_repo, clock):
        picker = MultiMediaPicker(media_repo, artist_repo, clock=clock)

        await picker.open()

        assert picker.is_open
        assert picker.loading is False
        assert picker.catalog.ids() == ["a", "b", "c"]
        assert [a.name for a in picker.artists] == ["Louise Bourgeois", "Pierre Soulages"]
        assert media_repo.list_calls[0].per_page == 500
        assert media_repo.list_calls[0].page == 1

    async def test_open_seeds_selection_from_host_value(self, media_repo, sample_media, clock):
        picker = MultiMediaPicker(
            media_repo,
            value=["c", "a"],
            previews=[sample_media[2], sample_media[0]],
            clock=clock,
        )
        await picker.open()
        assert picker.selected == ("c", "a")

    async def test_default_artist_seeds_filters(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, default_artist_id="artist-1", clock=clock)
        await picker.open()

        assert picker.filters.artist_id == "artist-1"
        assert picker.upload_artist_id == "artist-1"
        assert [item.id for item in picker.visible] == ["a", "c"]

    async def test_filters_reset_on_reopen(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        picker.set_date_filter("week")
        picker.set_sort(SortBy.NAME_ASC)
        picker.cancel()

        await picker.open()

        assert picker.filters.date_filter == DateFilter.ALL
        assert picker.filters.sort_by == SortBy.DATE_DESC

    async def test_fetch_failure_leaves_empty_library(self, media_repo, artist_repo, clock, caplog):
        media_repo.list_error = ApiConnectionException("connection refused")
        picker = MultiMediaPicker(media_repo, artist_repo, clock=clock)

        await picker.open()

        assert picker.is_open
        assert picker.loading is False
        assert picker.catalog.is_empty
        assert picker.empty_state == EmptyState.NO_MEDIA
        assert "Failed to load media library" in caplog.text

    async def test_filtered_out_is_not_empty_library(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        picker.set_artist_filter("nobody")

        assert picker.visible == []
        assert picker.empty_state == EmptyState.NO_MATCH

    async def test_artist_failure_falls_back_to_catalog_facets(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, FakeArtistRepository(fail=True), clock=clock)
        await picker.open()

        assert picker.artists == []
        assert [choice.id for choice in picker.artist_options] == ["artist-1", "artist-2"]

    async def test_host_artist_choices_skip_fetch(self, media_repo, artist_repo, clock):
        choices = [ArtistChoice(id="artist-1", name="Louise Bourgeois")]
        picker = MultiMediaPicker(media_repo, artist_repo, artist_choices=choices, clock=clock)
        await picker.open()

        assert artist_repo.calls == 0
        assert picker.artist_options == choices

    async def test_late_response_after_cancel_is_ignored(self, media_repo, clock):
        media_repo.list_gate = asyncio.Event()
        picker = MultiMediaPicker(media_repo, clock=clock)

        task = asyncio.create_task(picker.open())
        await asyncio.sleep(0)
        assert picker.loading is True

        picker.cancel()
        media_repo.list_gate.set()
        await task

        assert picker.is_open is False
        assert picker.catalog.is_empty
        assert picker.loading is False

    async def test_late_response_from_previous_session_is_ignored(self, media_repo, clock):
        media_repo.list_gate = asyncio.Event()
        picker = MultiMediaPicker(media_repo, clock=clock)

        first = asyncio.create_task(picker.open())
        await asyncio.sleep(0)
        picker.cancel()

        media_repo.items = [MediaFactory.create(id="fresh")]
        second = asyncio.create_task(picker.open())
        await asyncio.sleep(0)
        media_repo.list_gate.set()
        await asyncio.gather(first, second)

        assert picker.catalog.ids() == ["fresh"]
        assert picker.loading is False


@pytest.mark.asyncio
class TestSinglePicker:
    """Test the single-select picker."""

    async def test_commit_emits_selected_item(self, media_repo, sample_media, clock):
        on_change = ChangeRecorder()
        picker = MediaPicker(media_repo, on_change=on_change, clock=clock)
        await picker.open()

        picker.toggle("b")
        result = picker.commit()

        assert result.media_id == "b"
        assert on_change.calls == [("b", sample_media[1])]
        assert picker.is_open is False
        assert picker.value == "b"

    async def test_reclicking_selected_item_keeps_it(self, media_repo, clock):
        picker = MediaPicker(media_repo, value="a", clock=clock)
        await picker.open()

        picker.toggle("a")

        assert picker.selected == "a"

    async def test_cancel_does_not_leak_selection(self, media_repo, sample_media, clock):
        on_change = ChangeRecorder()
        picker = MediaPicker(media_repo, value="a", preview=sample_media[0], on_change=on_change, clock=clock)
        await picker.open()
        picker.toggle("c")

        picker.cancel()

        assert on_change.calls == []
        assert picker.value == "a"
        await picker.open()
        assert picker.selected == "a"

    async def test_clear_emits_nothing_selected(self, media_repo, sample_media, clock):
        on_change = ChangeRecorder()
        picker = MediaPicker(media_repo, value="a", preview=sample_media[0], on_change=on_change, clock=clock)

        picker.clear()

        assert on_change.calls == [(None, None)]
        assert picker.preview is None

    async def test_upload_selects_new_item(self, media_repo, clock):
        picker = MediaPicker(media_repo, clock=clock)
        await picker.open()

        result = await picker.upload([upload_file("hero.png")])

        new_id = result.uploaded[0].id
        assert picker.selected == new_id
        assert picker.catalog.ids()[0] == new_id
        assert picker.is_session_upload(new_id)

    async def test_commit_while_loading_is_ignored(self, media_repo, clock):
        media_repo.list_gate = asyncio.Event()
        on_change = ChangeRecorder()
        picker = MediaPicker(media_repo, value="a", on_change=on_change, clock=clock)

        task = asyncio.create_task(picker.open())
        await asyncio.sleep(0)
        result = picker.commit()

        assert result.media_id == "a"
        assert on_change.calls == []
        assert picker.is_open

        media_repo.list_gate.set()
        await task


@pytest.mark.asyncio
class TestMultiPicker:
    """Test the multi-select picker."""

    async def test_commit_emits_ordered_selection(self, media_repo, sample_media, clock):
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(media_repo, on_change=on_change, clock=clock)
        await picker.open()

        picker.toggle("c")
        picker.toggle("a")
        result = picker.commit()

        assert result.ids == ("c", "a")
        assert on_change.calls == [(["c", "a"], [sample_media[2], sample_media[0]])]
        assert picker.value == ["c", "a"]
        assert picker.is_open is False

    async def test_commit_drops_deleted_media(self, clock):
        item_a = MediaFactory.create(id="a")
        item_b = MediaFactory.create(id="b")
        repo = FakeMediaRepository([item_a, item_b])
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(repo, value=["a", "b"], previews=[item_a, item_b], on_change=on_change, clock=clock)
        await picker.open()

        picker.catalog.remove("b")
        result = picker.commit()

        assert result.ids == ("a",)
        assert result.items == (item_a,)
        assert on_change.calls == [(["a"], [item_a])]

    async def test_cancel_discards_edits(self, media_repo, sample_media, clock):
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(
            media_repo,
            value=["a"],
            previews=[sample_media[0]],
            on_change=on_change,
            clock=clock,
        )
        await picker.open()
        picker.toggle("b")
        picker.clear_selection()

        picker.cancel()

        assert on_change.calls == []
        assert picker.value == ["a"]

    async def test_select_all_visible(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        picker.toggle("b")
        picker.set_sort(SortBy.NAME_ASC)

        added = picker.select_all_visible()

        assert added == ["a", "c"]
        assert picker.selected == ("b", "a", "c")
        assert picker.position("c") == 3

    async def test_upload_batch_with_target_artist(self, media_repo, clock):
        """Both uploads are selected, remembered and shown under the artist."""
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        picker.set_upload_artist("A")

        result = await picker.upload([upload_file("one.png"), upload_file("two.png")])

        new_ids = [item.id for item in result.uploaded]
        assert len(new_ids) == 2
        assert picker.filters.artist_id == "A"
        assert picker.session_uploads == set(new_ids)
        assert picker.selected == tuple(new_ids)
        assert [m.artist_id for _, m in media_repo.uploads] == ["A", "A"]
        assert picker.catalog.ids()[:2] == [new_ids[1], new_ids[0]]
        assert picker.uploading is False

    async def test_upload_failure_does_not_stop_batch(self, media_repo, clock, caplog):
        media_repo.failing_uploads = {"broken.png"}
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()

        result = await picker.upload(
            [upload_file("first.png"), upload_file("broken.png"), upload_file("last.png")],
            MediaUploadMetadata(credit="Studio"),
        )

        assert [item.filename for item in result.uploaded] == ["first.png", "last.png"]
        assert [name for name, _ in result.failed] == ["broken.png"]
        assert len(picker.catalog) == 5
        assert "broken.png" not in [item.filename for item in picker.catalog]
        assert "Upload of broken.png failed" in caplog.text

    async def test_uploads_are_sequential_and_not_reentrant(self, media_repo, clock):
        media_repo.upload_gate = asyncio.Event()
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()

        task = asyncio.create_task(picker.upload([upload_file("one.png"), upload_file("two.png")]))
        await asyncio.sleep(0)

        assert picker.uploading is True
        assert [name for name, _ in media_repo.uploads] == ["one.png"]
        second = await picker.upload([upload_file("three.png")])
        assert second.uploaded == ()

        media_repo.upload_gate.set()
        result = await task

        assert [item.filename for item in result.uploaded] == ["one.png", "two.png"]
        assert picker.uploading is False

    async def test_upload_result_after_cancel_is_ignored(self, media_repo, clock):
        media_repo.upload_gate = asyncio.Event()
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()

        task = asyncio.create_task(picker.upload([upload_file("one.png"), upload_file("two.png")]))
        await asyncio.sleep(0)
        picker.cancel()
        media_repo.upload_gate.set()
        result = await task

        assert result.uploaded == ()
        assert [name for name, _ in media_repo.uploads] == ["one.png"]
        assert picker.catalog.is_empty
        assert picker.session_uploads == set()

    async def test_upload_when_closed_is_ignored(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        result = await picker.upload([upload_file("one.png")])
        assert result.uploaded == ()
        assert media_repo.uploads == []

    async def test_select_session_uploads(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        result = await picker.upload([upload_file("one.png"), upload_file("two.png")])
        picker.clear_selection()
        picker.toggle("a")

        added = picker.select_session_uploads()

        assert added == [item.id for item in result.uploaded]
        assert picker.selected == ("a", *added)

    async def test_session_uploads_reset_on_reopen(self, media_repo, clock):
        picker = MultiMediaPicker(media_repo, clock=clock)
        await picker.open()
        await picker.upload([upload_file("one.png")])
        picker.cancel()

        await picker.open()

        assert picker.session_uploads == set()

    async def test_sync_reseeds_selection_on_next_open(self, media_repo, sample_media, clock):
        picker = MultiMediaPicker(media_repo, value=["a"], previews=[sample_media[0]], clock=clock)
        await picker.open()
        picker.cancel()

        picker.sync(["c", "b"], [sample_media[2], sample_media[1]])
        await picker.open()

        assert picker.value == ["c", "b"]
        assert picker.selected == ("c", "b")
        assert picker.commit().ids == ("c", "b")


class TestMultiPickerHostPair:
    """Test operations on the host's ids and previews."""

    def test_drag_reorders_host_pair(self, media_repo):
        p1 = MediaFactory.create(id="1")
        p2 = MediaFactory.create(id="2")
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(media_repo, value=["1", "2"], previews=[p1, p2], on_change=on_change)

        picker.drag_start(0)
        picker.drag_over(1)
        picker.drag_end()

        assert on_change.calls == [(["2", "1"], [p2, p1])]
        assert picker.value == ["2", "1"]
        assert picker.previews == [p2, p1]

    def test_drag_over_same_index_emits_nothing(self, media_repo):
        p1 = MediaFactory.create(id="1")
        p2 = MediaFactory.create(id="2")
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(media_repo, value=["1", "2"], previews=[p1, p2], on_change=on_change)

        picker.drag_start(1)
        assert picker.drag_over(1) is None
        picker.drag_end()

        assert on_change.calls == []

    def test_remove(self, media_repo):
        items = [MediaFactory.create(id=str(i)) for i in range(3)]
        on_change = ChangeRecorder()
        picker = MultiMediaPicker(media_repo, value=["0", "1", "2"], previews=items, on_change=on_change)

        pair = picker.remove("1")

        assert pair.ids == ("0", "2")
        assert on_change.calls == [(["0", "2"], [items[0], items[2]])]

    def test_operations_without_handler_return_results(self, media_repo):
        items = [MediaFactory.create(id=str(i)) for i in range(2)]
        picker = MultiMediaPicker(media_repo, value=["0", "1"], previews=items)

        picker.drag_start(1)
        pair = picker.drag_over(0)

        assert pair.ids == ("1", "0")
        assert picker.value == ["1", "0"]


def html_answer(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text="<!doctype html><html><body>Gallery</body></html>", headers={"content-type": "text/html"})


@pytest.mark.asyncio
class TestPickerOverHttp:
    """Test the picker against non-JSON answers from the HTTP layer."""

    async def test_html_media_list_leaves_empty_library(self, clock, caplog):
        api = ApiClient(base_url="http://gallery.test/api", transport=httpx.MockTransport(html_answer))
        async with api:
            picker = MultiMediaPicker(MediaRepository(api), clock=clock)
            await picker.open()

        assert picker.is_open
        assert picker.loading is False
        assert picker.empty_state == EmptyState.NO_MEDIA
        assert "Failed to load media library" in caplog.text

    async def test_html_upload_answer_does_not_stop_batch(self, clock):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json=[])
            if b'filename="bad.png"' in request.content:
                return httpx.Response(200, text="<html>proxy</html>")
            return httpx.Response(201, json=MediaFactory.payload(id="good", filename="good.png"))

        api = ApiClient(base_url="http://gallery.test/api", transport=httpx.MockTransport(handler))
        async with api:
            picker = MultiMediaPicker(MediaRepository(api), clock=clock)
            await picker.open()
            result = await picker.upload([upload_file("bad.png"), upload_file("good.png")])

        assert [item.id for item in result.uploaded] == ["good"]
        assert [name for name, _ in result.failed] == ["bad.png"]
        assert picker.selected == ("good",)
        assert picker.uploading is False
