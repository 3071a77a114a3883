#!/usr/bin/env python3
"""
Resume ATS Analyzer - CLI Entry Point

Takes a structured resume (JSON) and a job description, prints the ATS
compatibility report and keyword coverage.

Usage:
    python -m resume_ats.main --resume input/resume.json --job input/job_description.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .extractor import extract_job_description
from .matcher import analyze_keywords
from .resume import Resume, ResumeFormatError
from .scorer import analyze_ats_compatibility

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resume ATS Analyzer - Score a resume against a job description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m resume_ats.main --resume input/resume.json --job input/job_description.txt
    python -m resume_ats.main -r resume.json -j job.txt -o report.json
    python -m resume_ats.main -r resume.json -j job.txt -v
        """
    )

    parser.add_argument(
        "-r", "--resume",
        type=str,
        required=True,
        help="Path to the structured resume JSON file"
    )

    parser.add_argument(
        "-j", "--job",
        type=str,
        required=True,
        help="Path to job description text file"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the full JSON report to this path"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def load_file(path: str) -> str:
    """Load content from a file, exiting on failure."""
    file_path = Path(path)
    if not file_path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        sys.exit(1)


def load_resume(path: str) -> Resume:
    """Load a resume JSON file, exiting on invalid content."""
    content = load_file(path)
    try:
        return Resume.from_dict(json.loads(content))
    except json.JSONDecodeError as e:
        print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except ResumeFormatError as e:
        print(f"Error: invalid resume in {path}: {e}", file=sys.stderr)
        sys.exit(1)


def save_file(path: Path, content: str) -> None:
    """Save content to a file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        print(f"Error writing {path}: {e}", file=sys.stderr)
        sys.exit(1)


def score_bar(score: int) -> str:
    filled = int(score / 10)
    return "█" * filled + "░" * (10 - filled)


def print_summary(job, keywords, score, verbose: bool = False) -> None:
    """Print a summary of the ATS report."""
    print("\n" + "=" * 60)
    print("RESUME ATS ANALYZER - MATCH SUMMARY")
    print("=" * 60)

    print(f"\nPosition: {job.job_title} at {job.company_name}")
    print(f"\nOverall ATS Score:     [{score_bar(score.overall)}] {score.overall}")
    print(f"  Keyword Match:        [{score_bar(score.keyword_match)}] {score.keyword_match}")
    print(f"  Format Compatibility: [{score_bar(score.format_compatibility)}] {score.format_compatibility}")
    print(f"  Section Completeness: [{score_bar(score.section_completeness)}] {score.section_completeness}")
    print(f"  Content Quality:      [{score_bar(score.content_quality)}] {score.content_quality}")

    print(f"\nMatched Keywords: {len(keywords.matched_keywords)}")
    print(f"Missing Keywords: {len(keywords.missing_keywords)}")

    if verbose:
        if keywords.matched_keywords:
            print("\n--- Matched Keywords ---")
            print(f"  {', '.join(keywords.matched_keywords)}")
        if keywords.missing_keywords:
            print("\n--- Missing Keywords ---")
            print(f"  {', '.join(keywords.missing_keywords)}")
        if keywords.suggested_competencies:
            print("\n--- Suggested Core Competencies ---")
            print(f"  {', '.join(keywords.suggested_competencies)}")

    if score.suggestions:
        print("\n--- Suggestions ---")
        for suggestion in score.suggestions:
            print(f"  - {suggestion}")

    print("\n" + "=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    logger.info("Loading resume: %s", args.resume)
    resume = load_resume(args.resume)

    logger.info("Loading job description: %s", args.job)
    job_content = load_file(args.job)

    job = extract_job_description(job_content)
    keywords = analyze_keywords(resume, job)
    score = analyze_ats_compatibility(resume, job)

    if args.output:
        report = {
            "job_description": job.to_dict(),
            "keywords": keywords.to_dict(),
            "ats_score": score.to_dict(),
        }
        output_path = Path(args.output)
        save_file(output_path, json.dumps(report, indent=2, ensure_ascii=False))
        logger.info("Saved report: %s", output_path)

    print_summary(job, keywords, score, args.verbose)

    if score.overall >= 80:
        print("\n✓ Excellent match! Resume is well-tailored for this position.")
        return 0
    elif score.overall >= 60:
        print("\n⚠ Good match. Review the suggestions above to improve further.")
        return 0
    else:
        print("\n⚠ Low match. Consider adding more relevant experience or skills.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
