from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import logging, typing as t

from qti_core import config
from qti_core.errors import InvalidPathError, QtiParseError
from qti_core.export import to_json
from qti_core.item import extract_item_identifier
from qti_core.manifest import parse_assessment_item_refs_from_xml, parse_assessment_test_xml
from qti_core.paths import resolve_assessment_href, resolve_relative_path
from qti_core.results import parse_result_item_refs_from_xml, parse_results_xml_raw

log = logging.getLogger(__name__)

app = FastAPI(title="QTI Extract API")

@app.get("/")
def root():
    return {"status": "ok", "service": "qti-extract-api"}

ALLOWED_ORIGINS = [
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class XmlReq(BaseModel):
    xml: str

class AssessmentHrefReq(BaseModel):
    testPath: str
    href: str

class RelativePathReq(BaseModel):
    basePath: str
    relativePath: str

# ---- Helpers ----
def _checked_xml(req: XmlReq) -> str:
    if len(req.xml.encode("utf-8", errors="surrogatepass")) > config.MAX_XML_BYTES:
        raise HTTPException(413, f"xml exceeds {config.MAX_XML_BYTES} bytes")
    return req.xml

# ---- Health ----
@app.get("/health")
def health() -> dict[str, t.Any]:
    return {"status": "ok", "max_xml_bytes": config.MAX_XML_BYTES}

# ---- Assessment tests ----
@app.post("/assessment-test/item-refs")
def assessment_test_item_refs(req: XmlReq):
    try:
        refs = parse_assessment_test_xml(_checked_xml(req))
    except QtiParseError as exc:
        raise HTTPException(422, str(exc))
    return {"itemRefs": to_json(refs)}

@app.post("/assessment-test/item-refs/tolerant")
def assessment_test_item_refs_tolerant(req: XmlReq):
    return to_json(parse_assessment_item_refs_from_xml(_checked_xml(req)))

# ---- Items ----
@app.post("/assessment-item/identifier")
def assessment_item_identifier(req: XmlReq):
    return {"identifier": extract_item_identifier(_checked_xml(req))}

# ---- Results ----
@app.post("/results/raw")
def results_raw(req: XmlReq):
    try:
        res = parse_results_xml_raw(_checked_xml(req))
    except QtiParseError as exc:
        raise HTTPException(422, str(exc))
    return to_json(res)

@app.post("/results/item-refs")
def results_item_refs(req: XmlReq):
    return to_json(parse_result_item_refs_from_xml(_checked_xml(req)))

# ---- Paths ----
@app.post("/paths/assessment-href")
def paths_assessment_href(req: AssessmentHrefReq):
    try:
        return {"path": resolve_assessment_href(req.testPath, req.href)}
    except InvalidPathError as exc:
        log.info("rejected href %r from %r", req.href, req.testPath)
        raise HTTPException(422, str(exc))

@app.post("/paths/relative")
def paths_relative(req: RelativePathReq):
    return {"path": resolve_relative_path(req.basePath, req.relativePath)}
