"""
FastAPI web application for the Resume ATS Analyzer.
Exposes job extraction, keyword matching, ATS scoring, highlighting and
writing analysis as JSON endpoints, plus job posting import from a URL.
"""

import logging
from typing import Any, Dict

import httpx
from bs4 import BeautifulSoup
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__, config
from .extractor import extract_job_description
from .highlighter import highlight_keywords
from .matcher import analyze_keywords
from .resume import Resume, ResumeFormatError, clean_resume
from .scorer import analyze_ats_compatibility
from .writing import analyze_human_writing

logger = logging.getLogger(__name__)

app = FastAPI(title="Resume ATS Analyzer", version=__version__)

MAX_IMPORTED_CHARS = 15000
FETCH_TIMEOUT = 30.0
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


# === Models ===

class JobRequest(BaseModel):
    job_description: str


class ResumeRequest(BaseModel):
    resume: Dict[str, Any]


class AnalysisRequest(BaseModel):
    resume: Dict[str, Any]
    job_description: str


class URLImportRequest(BaseModel):
    url: str


def _load_resume(data: Dict[str, Any]) -> Resume:
    try:
        return Resume.from_dict(data)
    except ResumeFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


# === Routes ===

@app.get("/api/health")
async def health_check():
    return {
        "status": "healthy",
        "version": __version__,
        "features": ["extract", "keywords", "ats_score", "highlight", "writing", "clean", "url_import"],
    }


@app.post("/api/job/extract")
async def extract_job(request: JobRequest):
    """Extract title, company, keywords and required skills from a posting."""
    job = extract_job_description(request.job_description)
    return JSONResponse(job.to_dict())


@app.post("/api/keywords")
async def keyword_analysis(request: AnalysisRequest):
    """Matched/missing keywords and suggested core competencies."""
    resume = _load_resume(request.resume)
    job = extract_job_description(request.job_description)
    keywords = analyze_keywords(resume, job)
    return JSONResponse({
        "job_description": job.to_dict(),
        "keywords": keywords.to_dict(),
        "coverage": round(keywords.coverage * 100, 1),
    })


@app.post("/api/ats-score")
async def ats_score(request: AnalysisRequest):
    """Full ATS compatibility report."""
    resume = _load_resume(request.resume)
    job = extract_job_description(request.job_description)
    keywords = analyze_keywords(resume, job)
    score = analyze_ats_compatibility(resume, job)
    return JSONResponse({
        "job_description": job.to_dict(),
        "keywords": keywords.to_dict(),
        "ats_score": score.to_dict(),
    })


@app.post("/api/highlight")
async def highlight(request: AnalysisRequest):
    """Resume with impact verbs, metrics and job keywords in <strong> tags."""
    resume = _load_resume(request.resume)
    job = extract_job_description(request.job_description)
    return JSONResponse({"resume": highlight_keywords(resume, job).to_dict()})


@app.post("/api/writing")
async def writing_analysis(request: ResumeRequest):
    """Bullet variety and stock-phrase analysis."""
    resume = _load_resume(request.resume)
    return JSONResponse(analyze_human_writing(resume).to_dict())


@app.post("/api/clean")
async def clean(request: ResumeRequest):
    """Resume with em/en dashes replaced by hyphens and acronym casing fixed."""
    resume = _load_resume(request.resume)
    return JSONResponse({"resume": clean_resume(resume).to_dict()})


def extract_posting_text(html: str, url: str) -> str:
    """Pull the job description text out of a job board page."""
    soup = BeautifulSoup(html, "html.parser")

    for element in soup(["script", "style", "nav", "footer", "header"]):
        element.decompose()

    job_text = ""

    if "linkedin.com" in url:
        desc = soup.find("div", {"class": "description__text"})
        if desc:
            job_text = desc.get_text(separator="\n", strip=True)

    elif "greenhouse.io" in url:
        content = soup.find("div", {"id": "content"})
        if content:
            job_text = content.get_text(separator="\n", strip=True)

    elif "lever.co" in url:
        content = soup.find("div", {"class": "section-wrapper"})
        if content:
            job_text = content.get_text(separator="\n", strip=True)

    if not job_text:
        for selector in ["main", "article", '[role="main"]', ".job-description", "#job-description"]:
            content = soup.select_one(selector)
            if content:
                job_text = content.get_text(separator="\n", strip=True)
                break

    if not job_text:
        body = soup.find("body")
        if body:
            job_text = body.get_text(separator="\n", strip=True)

    lines = [line.strip() for line in job_text.split("\n") if line.strip()]
    job_text = "\n".join(lines)

    if len(job_text) > MAX_IMPORTED_CHARS:
        job_text = job_text[:MAX_IMPORTED_CHARS]

    return job_text


@app.post("/api/import-url")
async def import_job_url(request: URLImportRequest):
    """Import a job description from a URL and extract its keywords."""
    try:
        async with httpx.AsyncClient(follow_redirects=True, timeout=FETCH_TIMEOUT) as client:
            response = await client.get(request.url, headers={"User-Agent": USER_AGENT})
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Failed to fetch %s: %s", request.url, e)
        raise HTTPException(status_code=400, detail=f"Failed to fetch URL: {str(e)}")

    job_text = extract_posting_text(response.text, request.url)
    job = extract_job_description(job_text)

    return JSONResponse({
        "success": True,
        "url": request.url,
        "job_description": job.to_dict(),
    })


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
    uvicorn.run(app, host=config.HOST, port=config.PORT)
