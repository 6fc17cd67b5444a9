# =============================================================================
# tests/test_listing_service.py - Listing Submission Workflow Tests
# =============================================================================
# Drives ListingSubmission against a mocked Supabase client and checks which
# backend calls are made for each kind of draft and failure.
# =============================================================================

import asyncio
import threading

import pytest

from core.models import Route, SubmissionClosedError, SubmissionState
from core.services.listing_service import (
    GENERIC_FAILURE_MESSAGE,
    ListingSubmission,
    user_facing_message,
)

from tests.conftest import PUBLIC_URL_PREFIX, USER_ID, make_image


def run(submission: ListingSubmission):
    return asyncio.run(submission.run())


def upload_calls(backend):
    return backend.storage.from_.return_value.upload.call_args_list


def insert_calls(backend):
    return backend.table.return_value.insert.call_args_list


class FakeStorageError(Exception):
    """Shaped like storage3's StorageException: a dict as the only arg."""


def failing_upload(prefix: str, message: str = "The resource already exists"):
    """Upload side effect that rejects paths starting with `prefix`."""
    def upload(path, file, file_options):
        if path.startswith(prefix):
            raise FakeStorageError({"message": message, "statusCode": 409})
        return type("Uploaded", (), {"path": path})()
    return upload


# =============================================================================
# Blocked (no identity)
# =============================================================================

class TestUnauthenticatedSubmission:

    def test_no_backend_calls_and_redirect(self, backend, joes_cafe_draft, image_factory):
        joes_cafe_draft.set_logo(image_factory("logo.png"))

        result = run(ListingSubmission(joes_cafe_draft, user=None))

        assert result.state is SubmissionState.BLOCKED
        assert result.redirect_to == Route.SIGN_IN
        assert result.notification.title == "Authentication Required"
        assert result.notification.variant == "destructive"
        assert upload_calls(backend) == []
        assert insert_calls(backend) == []


# =============================================================================
# Successful submissions
# =============================================================================

class TestSuccessfulSubmission:

    def test_joes_cafe_single_insert(self, backend, user, joes_cafe_draft):
        """No files, no options: one insert with null image/options columns."""
        submission = ListingSubmission(joes_cafe_draft, user)
        result = run(submission)

        assert result.state is SubmissionState.SUCCEEDED
        assert result.redirect_to == Route.DASHBOARD
        assert result.notification.title == "Success!"
        assert result.draft is None
        assert submission.draft is None

        assert upload_calls(backend) == []
        assert len(insert_calls(backend)) == 1
        backend.table.assert_called_with("businesses")

        row = insert_calls(backend)[0].args[0]
        assert row["owner_id"] == USER_ID
        assert row["name"] == "Joe's Cafe"
        assert row["category"] == "Restaurant"
        assert row["description"] == "Coffee shop"
        assert row["phone"] == "555-1111"
        assert row["address"] == "1 Main St"
        assert row["city"] == "Springfield"
        assert row["state"] == "IL"
        assert row["zip_code"] == "62701"
        assert row["image_url"] is None
        assert row["product_images"] is None
        assert row["business_options"] is None

    @pytest.mark.parametrize("image_count", [0, 1, 2, 3])
    def test_logo_plus_images_upload_count(self, backend, user, joes_cafe_draft, image_count):
        """Logo + N images -> 1 + N uploads, then the insert."""
        joes_cafe_draft.set_logo(make_image("logo.png"))
        joes_cafe_draft.set_product_images([make_image(f"p{i}.png") for i in range(image_count)])

        result = run(ListingSubmission(joes_cafe_draft, user))

        assert result.state is SubmissionState.SUCCEEDED
        assert len(upload_calls(backend)) == 1 + image_count
        assert len(insert_calls(backend)) == 1

        row = insert_calls(backend)[0].args[0]
        assert row["image_url"].startswith(PUBLIC_URL_PREFIX + f"logos/{USER_ID}/")
        if image_count:
            assert len(row["product_images"]) == image_count
        else:
            assert row["product_images"] is None

    def test_upload_paths_and_options(self, backend, user, joes_cafe_draft):
        joes_cafe_draft.set_logo(make_image("logo.png"))
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png")])

        run(ListingSubmission(joes_cafe_draft, user))

        paths = [c.kwargs["path"] for c in upload_calls(backend)]
        assert paths[0].startswith(f"logos/{USER_ID}/")
        assert paths[0].endswith("_logo.png")
        product_paths = sorted(paths[1:])
        assert product_paths[0].startswith(f"products/{USER_ID}/")
        assert product_paths[0].endswith("_0_a.png")
        assert product_paths[1].endswith("_1_b.png")

        for c in upload_calls(backend):
            assert c.kwargs["file_options"]["upsert"] == "false"
            assert c.kwargs["file_options"]["cache-control"] == "3600"
        backend.storage.from_.assert_called_with("business-assets")

    def test_product_images_keep_selection_order(self, backend, user, joes_cafe_draft):
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png"), make_image("c.png")])

        run(ListingSubmission(joes_cafe_draft, user))

        urls = insert_calls(backend)[0].args[0]["product_images"]
        assert [u.rsplit("_", 1)[-1] for u in urls] == ["a.png", "b.png", "c.png"]

    def test_checked_options_in_payload(self, backend, user, joes_cafe_draft):
        joes_cafe_draft.set_option("Digital Payments", True)
        joes_cafe_draft.set_option("Cash on Delivery", True)

        run(ListingSubmission(joes_cafe_draft, user))

        row = insert_calls(backend)[0].args[0]
        assert set(row["business_options"]) == {"Digital Payments", "Cash on Delivery"}


# =============================================================================
# Failed submissions
# =============================================================================

class TestFailedSubmission:

    def test_logo_failure_stops_everything(self, backend, user, joes_cafe_draft):
        """Failed logo upload: exactly one upload call, no insert."""
        backend.storage.from_.return_value.upload.side_effect = failing_upload("logos/")
        joes_cafe_draft.set_logo(make_image("logo.png"))
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png")])

        result = run(ListingSubmission(joes_cafe_draft, user))

        assert result.state is SubmissionState.FAILED
        assert len(upload_calls(backend)) == 1
        assert insert_calls(backend) == []
        assert result.notification.description == "The resource already exists"
        assert result.redirect_to is None

    def test_product_image_failure_skips_insert(self, backend, user, joes_cafe_draft):
        backend.storage.from_.return_value.upload.side_effect = failing_upload(
            f"products/{USER_ID}/", message="Payload too large"
        )
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png")])

        result = run(ListingSubmission(joes_cafe_draft, user))

        assert result.state is SubmissionState.FAILED
        assert insert_calls(backend) == []
        assert result.notification.description == "Payload too large"

    def test_one_failed_product_image_fails_group(self, backend, user, joes_cafe_draft):
        """Siblings still upload; the group as a whole fails."""
        def upload(path, file, file_options):
            if "_1_" in path:
                raise FakeStorageError({"message": "mime type not allowed"})
            return type("Uploaded", (), {"path": path})()

        backend.storage.from_.return_value.upload.side_effect = upload
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png"), make_image("c.png")])

        result = run(ListingSubmission(joes_cafe_draft, user))

        assert result.state is SubmissionState.FAILED
        assert insert_calls(backend) == []
        assert result.notification.description == "mime type not allowed"
        assert len(upload_calls(backend)) == 3

    def test_product_images_upload_concurrently(self, backend, user, joes_cafe_draft):
        """All three uploads must be in flight at once to pass the barrier."""
        barrier = threading.Barrier(3, timeout=5)

        def upload(path, file, file_options):
            barrier.wait()
            return type("Uploaded", (), {"path": path})()

        backend.storage.from_.return_value.upload.side_effect = upload
        joes_cafe_draft.set_product_images([make_image("a.png"), make_image("b.png"), make_image("c.png")])

        result = run(ListingSubmission(joes_cafe_draft, user))

        assert result.state is SubmissionState.SUCCEEDED
        assert len(upload_calls(backend)) == 3
        assert len(insert_calls(backend)[0].args[0]["product_images"]) == 3

    def test_insert_failure_keeps_draft(self, backend, user, joes_cafe_draft):
        class FakeAPIError(Exception):
            def __init__(self, message):
                super().__init__(message)
                self.message = message

        backend.table.return_value.insert.side_effect = FakeAPIError(
            'new row violates row-level security policy for table "businesses"'
        )

        submission = ListingSubmission(joes_cafe_draft, user)
        result = run(submission)

        assert result.state is SubmissionState.FAILED
        assert "row-level security" in result.notification.description
        assert result.notification.variant == "destructive"
        assert result.draft["name"] == "Joe's Cafe"
        assert submission.draft is joes_cafe_draft

    def test_attempt_cannot_be_rerun(self, backend, user, joes_cafe_draft):
        submission = ListingSubmission(joes_cafe_draft, user)
        run(submission)

        with pytest.raises(SubmissionClosedError):
            run(submission)

    def test_submit_disabled_only_while_in_flight(self, backend, user, joes_cafe_draft):
        seen = []
        submission = ListingSubmission(joes_cafe_draft, user)

        def insert(row):
            seen.append(submission.submit_disabled)
            raise RuntimeError("")

        backend.table.return_value.insert.side_effect = insert

        assert submission.submit_disabled is False
        result = run(submission)

        assert seen == [True]
        assert submission.submit_disabled is False
        assert result.notification.description == GENERIC_FAILURE_MESSAGE


class TestUserFacingMessage:

    def test_dict_arg_message(self):
        assert user_facing_message(FakeStorageError({"message": "Duplicate"})) == "Duplicate"

    def test_empty_message_falls_back(self):
        assert user_facing_message(RuntimeError()) == GENERIC_FAILURE_MESSAGE
