"""Concrete sources: Google Sheets tabs, plain CSV URLs and local files."""

from pathlib import Path

import httpx

from .base import BaseSource, SourceError

GVIZ_CSV_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&gid={gid}"


class UrlSource(BaseSource):
    """CSV served over HTTP(S)."""

    def __init__(self, url: str, source_id: str | None = None):
        self.url = url
        self.source_id = source_id or url

    def fetch_text(self, client: httpx.Client) -> str:
        response = client.get(self.url)
        if not response.is_success:
            raise SourceError(
                f"HTTP {response.status_code} from {self.url}",
                status_code=response.status_code,
            )
        return response.text


class SheetSource(UrlSource):
    """
    One tab of a public Google spreadsheet, read through the Visualization
    API CSV endpoint (friendlier to plain downloads than the export URL).
    """

    def __init__(self, sheet_id: str, gid: str):
        self.sheet_id = sheet_id
        self.gid = str(gid)
        super().__init__(
            GVIZ_CSV_URL.format(sheet_id=sheet_id, gid=self.gid),
            source_id=f"sheet:{self.gid}",
        )


class FileSource(BaseSource):
    """CSV file on disk; a leading BOM is dropped."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.source_id = f"file:{self.path.name}"

    def fetch_text(self, client: httpx.Client) -> str:
        return self.path.read_text(encoding="utf-8-sig")
