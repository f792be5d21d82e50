"""Test doubles for the Drive client and the evidence uploader."""

from trustlink.utils.constants import DRIVE_FOLDER_MIME


class FakeUploader:
    """Stands in for EvidenceUploader; records every call."""

    def __init__(self, file_id: str = "drive-file-1", error: Exception | None = None):
        self.file_id = file_id
        self.error = error
        self.calls = []

    def upload(self, refresh_token, payload, file_name, user_email):
        self.calls.append(
            {"refresh_token": refresh_token, "payload": payload, "file_name": file_name, "user_email": user_email}
        )
        if self.error is not None:
            raise self.error
        return self.file_id


class _Call:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class _FakeFiles:
    def __init__(self, drive: "FakeDrive"):
        self.drive = drive

    def list(self, q, fields, spaces=None):
        self.drive.queries.append(q)

        def run():
            hits = [f for f in self.drive.folders if "name='{}'".format(f["name"].replace("'", "\\'")) in q]
            return {"files": [{"id": f["id"], "name": f["name"]} for f in hits]}

        return _Call(run)

    def create(self, body, fields, media_body=None):
        def run():
            if body.get("mimeType") == DRIVE_FOLDER_MIME:
                folder = {"id": f"folder-{len(self.drive.folders) + 1}", "name": body["name"]}
                self.drive.folders.append(folder)
                return {"id": folder["id"]}

            if self.drive.fail_uploads > 0:
                self.drive.fail_uploads -= 1
                raise ConnectionError("drive upload reset")

            file_id = f"file-{len(self.drive.uploads) + 1}"
            self.drive.uploads.append({"id": file_id, "body": body, "media": media_body})
            return {"id": file_id}

        return _Call(run)


class FakeDrive:
    """Just enough of the Drive v3 files() resource for folder lookup and upload."""

    def __init__(self, fail_uploads: int = 0):
        self.folders = []
        self.uploads = []
        self.queries = []
        self.fail_uploads = fail_uploads

    def files(self):
        return _FakeFiles(self)
