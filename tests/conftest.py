"""
Shared fixtures: Office containers built in memory.
"""

import io
import struct
import zipfile

import pytest

APP_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties" xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"><Template>Normal.dotm</Template><TotalTime>12</TotalTime><Pages>3</Pages><Words>250</Words><Characters>1400</Characters><Application>Microsoft Office Word</Application><DocSecurity>0</DocSecurity><Lines>11</Lines><Paragraphs>3</Paragraphs><ScaleCrop>false</ScaleCrop><HeadingPairs><vt:vector size="2" baseType="variant"><vt:variant><vt:lpstr>Title</vt:lpstr></vt:variant><vt:variant><vt:i4>1</vt:i4></vt:variant></vt:vector></HeadingPairs><TitlesOfParts><vt:vector size="1" baseType="lpstr"><vt:lpstr></vt:lpstr></vt:vector></TitlesOfParts><Company></Company><LinksUpToDate>false</LinksUpToDate><CharactersWithSpaces>1647</CharactersWithSpaces><SharedDoc>false</SharedDoc><HyperlinksChanged>false</HyperlinksChanged><AppVersion>16.0000</AppVersion></Properties>"""

CORE_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<cp:coreProperties xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:dcterms="http://purl.org/dc/terms/" xmlns:dcmitype="http://purl.org/dc/dcmitype/" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"><dc:title>Quarterly Report</dc:title><dc:subject></dc:subject><dc:creator>Jane Doe</dc:creator><cp:keywords>finance, q3</cp:keywords><dc:description></dc:description><cp:lastModifiedBy>John Roe</cp:lastModifiedBy><cp:revision>4</cp:revision><dcterms:created xsi:type="dcterms:W3CDTF">2024-01-15T10:30:00Z</dcterms:created><dcterms:modified xsi:type="dcterms:W3CDTF">2024-02-01T08:00:00Z</dcterms:modified></cp:coreProperties>"""

CUSTOM_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/custom-properties" xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"><property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="2" name="Dept"><vt:lpwstr>Engineering</vt:lpwstr></property><property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="3" name="Budget"><vt:lpwstr>1200</vt:lpwstr></property><property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="4" name="Reviewed"><vt:bool>true</vt:bool></property><property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="5" name="Owner"><vt:lpwstr></vt:lpwstr></property></Properties>"""

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"><Default Extension="xml" ContentType="application/xml"/></Types>"""

DOCUMENT_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"><w:body><w:p><w:r><w:t>Hello</w:t></w:r></w:p></w:body></w:document>"""

EXPECTED_APP = {
    "appVersion": "16.0000",
    "application": "Microsoft Office Word",
    "characters": 1400,
    "charactersWithSpaces": 1647,
    "docSecurity": 0,
    "hyperlinksChanged": "false",
    "lines": 11,
    "linksUpToDate": "false",
    "pages": 3,
    "paragraphs": 3,
    "scaleCrop": "false",
    "sharedDoc": "false",
    "template": "Normal.dotm",
    "totalTime": 12,
    "words": 250,
}

EXPECTED_CORE = {
    "created": "2024-01-15T10:30:00Z",
    "creator": "Jane Doe",
    "keywords": "finance, q3",
    "lastModifiedBy": "John Roe",
    "modified": "2024-02-01T08:00:00Z",
    "revision": 4,
    "title": "Quarterly Report",
}

DEPT_MAPPING = {"msName": "Dept", "name": "department", "type": "string"}


def build_archive(entries, compression=zipfile.ZIP_DEFLATED) -> bytes:
    """Build a zip container from (name, content) pairs, in order."""
    if isinstance(entries, dict):
        entries = list(entries.items())

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        for name, content in entries:
            archive.writestr(name, content)
    return buffer.getvalue()


def patch_central_directory(data: bytes, version_needed=None, header_offset=None) -> bytes:
    """Rewrite fields of the first central directory record of an archive."""
    patched = bytearray(data)
    record = patched.index(b"PK\x01\x02")
    if version_needed is not None:
        struct.pack_into("<H", patched, record + 6, version_needed)
    if header_offset is not None:
        struct.pack_into("<L", patched, record + 42, header_offset)
    return bytes(patched)


@pytest.fixture
def make_archive():
    """Factory for in-memory containers."""
    return build_archive


@pytest.fixture
def docx_bytes():
    """A minimal .docx with all three property parts."""
    return build_archive(
        [
            ("[Content_Types].xml", CONTENT_TYPES_XML),
            ("word/document.xml", DOCUMENT_XML),
            ("docProps/app.xml", APP_XML),
            ("docProps/core.xml", CORE_XML),
            ("docProps/custom.xml", CUSTOM_XML),
        ]
    )


@pytest.fixture
def docx_path(tmp_path, docx_bytes):
    """The same container written to disk."""
    path = tmp_path / "report.docx"
    path.write_bytes(docx_bytes)
    return path


@pytest.fixture(autouse=True)
def reset_custom_properties():
    """Leave the process-wide custom property table empty after each test."""
    yield
    from docprops import configure_custom_properties

    configure_custom_properties([])


class CallbackRecorder:
    """Records callback invocations."""

    def __init__(self):
        self.calls = []

    def __call__(self, error, result):
        self.calls.append((error, result))

    @property
    def error(self):
        return self.calls[-1][0]

    @property
    def result(self):
        return self.calls[-1][1]


@pytest.fixture
def callback():
    return CallbackRecorder()
