import pytest

from fakes import FakeDrive
from trustlink.services.drive_storage import (
    EvidenceUploader,
    evidence_folder_name,
    get_or_create_evidence_folder,
)
from trustlink.services.retry import RetryPolicy
from trustlink.utils.constants import DRIVE_FOLDER_MIME, EVIDENCE_MIME

USER = "alice@example.com"


@pytest.fixture
def drive():
    return FakeDrive()


@pytest.fixture
def sleeps():
    return []


def _uploader(factory, sleeps):
    return EvidenceUploader(factory, RetryPolicy(max_attempts=3, base_delay=2.0, sleep=sleeps.append))


def test_folder_name_replaces_at_sign():
    assert evidence_folder_name(USER) == "SOS_Evidence_alice_at_example.com"


def test_folder_is_created_when_missing(drive):
    folder_id = get_or_create_evidence_folder(drive, USER)

    assert folder_id == "folder-1"
    assert drive.folders == [{"id": "folder-1", "name": "SOS_Evidence_alice_at_example.com"}]
    q = drive.queries[0]
    assert "name='SOS_Evidence_alice_at_example.com'" in q
    assert f"mimeType='{DRIVE_FOLDER_MIME}'" in q
    assert "trashed=false" in q


def test_existing_folder_is_reused(drive):
    first = get_or_create_evidence_folder(drive, USER)
    second = get_or_create_evidence_folder(drive, USER)

    assert first == second
    assert len(drive.folders) == 1


def test_first_of_duplicate_folders_wins(drive):
    name = evidence_folder_name(USER)
    drive.folders = [{"id": "dup-a", "name": name}, {"id": "dup-b", "name": name}]

    assert get_or_create_evidence_folder(drive, USER) == "dup-a"
    assert len(drive.folders) == 2


def test_quotes_in_folder_name_are_escaped(drive):
    get_or_create_evidence_folder(drive, "o'brien@example.com")
    assert "name='SOS_Evidence_o\\'brien_at_example.com'" in drive.queries[0]


def test_upload_places_video_in_user_folder(drive, sleeps):
    seen_tokens = []

    def factory(refresh_token):
        seen_tokens.append(refresh_token)
        return drive

    file_id = _uploader(factory, sleeps).upload("1//rt", b"\x00\x01video", "clip.mp4", USER)

    assert file_id == "file-1"
    assert seen_tokens == ["1//rt"]
    upload = drive.uploads[0]
    assert upload["body"] == {"name": "clip.mp4", "parents": ["folder-1"]}
    assert upload["media"].mimetype() == EVIDENCE_MIME
    assert upload["media"].getbytes(0, upload["media"].size()) == b"\x00\x01video"
    assert sleeps == []


def test_second_upload_reuses_folder(drive, sleeps):
    uploader = _uploader(lambda _: drive, sleeps)

    uploader.upload("1//rt", b"a", "one.mp4", USER)
    uploader.upload("1//rt", b"b", "two.mp4", USER)

    assert len(drive.folders) == 1
    assert [u["body"]["parents"] for u in drive.uploads] == [["folder-1"], ["folder-1"]]


def test_transient_failures_are_retried_with_backoff(sleeps):
    drive = FakeDrive(fail_uploads=2)
    calls = []

    def factory(refresh_token):
        calls.append(refresh_token)
        return drive

    file_id = _uploader(factory, sleeps).upload("1//rt", b"v", "clip.mp4", USER)

    assert file_id == "file-1"
    # fresh credentials on every attempt
    assert len(calls) == 3
    assert sleeps == [2.0, 4.0]
    assert len(drive.folders) == 1


def test_persistent_failure_surfaces_last_error(sleeps):
    drive = FakeDrive(fail_uploads=5)
    calls = []

    def factory(refresh_token):
        calls.append(refresh_token)
        return drive

    with pytest.raises(ConnectionError, match="drive upload reset"):
        _uploader(factory, sleeps).upload("1//rt", b"v", "clip.mp4", USER)

    assert len(calls) == 3
    assert sleeps == [2.0, 4.0]
    assert drive.uploads == []


def test_credential_refresh_failure_is_retried(drive, sleeps):
    attempts = {"n": 0}

    def factory(refresh_token):
        attempts["n"] += 1
        if attempts["n"] == 1:
            raise RuntimeError("token endpoint unavailable")
        return drive

    assert _uploader(factory, sleeps).upload("1//rt", b"v", "clip.mp4", USER) == "file-1"
    assert sleeps == [2.0]
