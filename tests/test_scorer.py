import unittest

from resume_ats import config
from resume_ats.extractor import JobDescription, extract_job_description
from resume_ats.resume import EducationItem, ExperienceItem, PersonalInfo, Resume
from resume_ats.scorer import (
    ATSScorer,
    analyze_ats_compatibility,
    combine_scores,
    round_half_up,
)
from tests.sample_data import SAMPLE_JOB, SAMPLE_RESUME, sample_resume_data

LOW_MATCH_TIP = (
    "Your keyword match is low. Consider reframing bullet points to include "
    "more job description terminology"
)
SUMMARY_TIP = (
    "Add a compelling professional summary (150+ characters) that highlights "
    "your fit for this role"
)
COMPETENCY_TIP = "Add 5-8 core competencies that match the job requirements"
BULLET_TIP = "Add more bullet points to each role (aim for 4-6 per position)"
WEAK_VERB_TIP = (
    "Replace weak verbs (assisted, helped, worked) with strong action verbs "
    "(achieved, implemented, delivered)"
)
METRICS_TIP = "Add quantifiable metrics to more bullet points (%, $, numbers) to demonstrate impact"
LEADERSHIP_TIP = "Highlight leadership experience: team size, mentoring, cross-functional collaboration"
ABOVE_THE_FOLD_TIP = (
    "Add 3-5 key skills from the job description into your summary and most recent "
    "role - ATS systems weight the top of your resume more heavily"
)
RECENT_ROLE_TIP = (
    "Your most recent role has fewer bullets than an older role - expand your latest "
    "position, recruiters and ATS focus on recent experience"
)


def plain_resume(bullet="Built reporting pipelines for finance teams"):
    """Resume that passes every format check and has no special characters."""
    return Resume(
        personal=PersonalInfo(name="Jane Doe", email="jane@example.com", phone="(555) 123-4567"),
        summary="Data engineer focused on reliable pipelines",
        experience=[
            ExperienceItem(title="Data Engineer", company="Contoso", end_date="2023", bullets=[bullet]),
        ],
        education=[EducationItem(degree="BS Computer Science", institution="UT Austin")],
        skills=["Python", "SQL"],
    )


class CombineScoresTests(unittest.TestCase):
    def test_weighted_overall(self):
        self.assertEqual(combine_scores(80, 90, 70, 60), 77)

    def test_bounds(self):
        self.assertEqual(combine_scores(0, 0, 0, 0), 0)
        self.assertEqual(combine_scores(100, 100, 100, 100), 100)

    def test_weights_sum_to_one(self):
        self.assertAlmostEqual(sum(config.SCORE_WEIGHTS.values()), 1.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(76.5), 77)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.4999), 2)
        self.assertEqual(round_half_up(0.1 * 3 * 5), 2)


class KeywordMatchTests(unittest.TestCase):
    def score(self, resume, job):
        return ATSScorer(resume, job).calculate_keyword_match()

    def test_no_keywords_is_full_match(self):
        self.assertEqual(self.score(Resume(), JobDescription()), 100)

    def test_required_skills_weigh_double(self):
        job = JobDescription(required_skills=["python", "kubernetes"], extracted_keywords=["docker"])
        resume = Resume(summary="Python and Docker developer")

        # python 2 + docker 1 out of 2 + 2 + 1
        self.assertEqual(self.score(resume, job), 60)

    def test_partial_credit_for_related_keyword(self):
        job = JobDescription(required_skills=["python"], extracted_keywords=["python 3"])
        resume = Resume(summary="Python developer")

        self.assertEqual(self.score(resume, job), 83)

    def test_core_competency_bonus(self):
        job = JobDescription(required_skills=["python", "spark", "airflow", "kafka", "kubernetes"])
        resume = Resume(core_competencies=["Python", "Spark", "Airflow", "Kafka"])

        self.assertEqual(self.score(resume, job), 85)

    def test_weighted_keywords_count_each_keyword_once(self):
        job = JobDescription(required_skills=["Python", "sql"], extracted_keywords=["python", "sql", "dbt"])
        scorer = ATSScorer(Resume(), job)

        self.assertEqual(scorer.weighted_keywords(), [("python", 2), ("sql", 2), ("dbt", 1)])


class FormatCompatibilityTests(unittest.TestCase):
    def score(self, resume):
        return ATSScorer(resume, JobDescription()).calculate_format_compatibility()

    def test_clean_resume(self):
        self.assertEqual(self.score(plain_resume()), 100)

    def test_em_dash_costs_eight_points(self):
        clean = self.score(plain_resume("Built reporting pipelines for finance teams"))
        dashed = self.score(plain_resume("Built reporting pipelines — for finance teams"))

        self.assertEqual(clean - dashed, 8)

    def test_en_dash_is_detected(self):
        self.assertEqual(self.score(plain_resume("Built pipelines 2019–2021")), 92)

    def test_empty_resume(self):
        # missing sections and contact details
        self.assertEqual(self.score(Resume()), 83)

    def test_open_ended_role_without_current_flag(self):
        resume = plain_resume()
        resume.experience.append(ExperienceItem(title="Analyst", start_date="2018"))
        self.assertEqual(self.score(resume), 95)

        resume.experience[-1].current = True
        self.assertEqual(self.score(resume), 100)

    def test_special_characters(self):
        self.assertEqual(self.score(plain_resume("Built pipelines " + "|" * 11)), 96)
        self.assertEqual(self.score(plain_resume("Built pipelines " + "|" * 21)), 92)

    def test_skill_categories_bonus_is_capped(self):
        data = sample_resume_data(skillCategories=[{"category": "Languages", "skills": ["Python"]}])
        self.assertEqual(self.score(Resume.from_dict(data)), 100)


class SectionCompletenessTests(unittest.TestCase):
    def score(self, resume):
        return ATSScorer(resume, JobDescription()).calculate_section_completeness()

    def test_empty_resume(self):
        self.assertEqual(self.score(Resume()), 0)

    def test_partial_resume(self):
        resume = Resume(
            personal=PersonalInfo(name="Jane Doe", email="jane@example.com"),
            summary="x" * 60,
            experience=[ExperienceItem(title="Analyst", bullets=["One", "Two"])],
            education=[EducationItem(degree="BA")],
            skills=["a", "b", "c", "d", "e"],
        )

        # 10 + 8.33 + 10 + 16.67 + 11.67
        self.assertEqual(self.score(resume), 57)

    def test_complete_resume_is_capped(self):
        resume = Resume(
            personal=PersonalInfo(name="Jane", email="j@x.io", phone="555 123 4567", linkedin="in/jane"),
            summary="x" * 150,
            experience=[ExperienceItem(bullets=["a", "b", "c", "d"]) for _ in range(3)],
            education=[EducationItem(degree="BS")],
            skills=["skill"] * 10,
            core_competencies=["c1", "c2", "c3", "c4", "c5"],
        )

        self.assertEqual(self.score(resume), 100)


class ContentQualityTests(unittest.TestCase):
    def score(self, bullets):
        resume = Resume(experience=[ExperienceItem(title="Analyst", end_date="2020", bullets=bullets)])
        return ATSScorer(resume, JobDescription()).calculate_content_quality()

    def test_metrics_raise_content_quality(self):
        without_metrics = self.score(["Worked on weekly reports", "Worked on data cleanup"])
        with_metrics = self.score([
            "Worked on weekly reports, 20% faster",
            "Worked on data cleanup for 30% fewer errors",
        ])

        self.assertEqual(without_metrics, 47)
        self.assertEqual(with_metrics, 69)
        self.assertLess(without_metrics, with_metrics)

    def test_strong_verbs_and_keywords(self):
        bullets = [
            "Built Spark pipelines on AWS that process 2 billion claim records every month for analysts",
            "Reduced warehouse query costs by 35% by partitioning the largest SQL tables by date",
        ]
        resume = Resume(
            summary="Spark, AWS and SQL engineer",
            experience=[ExperienceItem(title="Data Engineer", end_date="2023", bullets=bullets)],
        )
        job = JobDescription(required_skills=["spark", "aws", "sql"])

        # +10 verbs, +10 metrics, +8 keywords, +5 length, +5 summary, +5 above the fold
        self.assertEqual(ATSScorer(resume, job).calculate_content_quality(), 100)

    def test_stays_in_range(self):
        self.assertGreaterEqual(self.score([]), 0)
        self.assertLessEqual(self.score(["Led " + "x" * 300]), 100)


class SuggestionTests(unittest.TestCase):
    def test_missing_required_keywords_come_first(self):
        job = JobDescription(
            text="Leadership of small teams is a plus",
            required_skills=["kubernetes", "terraform", "sql"],
        )

        score = analyze_ats_compatibility(Resume(), job)

        self.assertEqual(
            score.suggestions[0],
            "Add these missing keywords from the job description: Kubernetes, Terraform, SQL",
        )
        self.assertLessEqual(len(score.suggestions), config.MAX_SUGGESTIONS)

    def test_dash_suggestion(self):
        resume = plain_resume("Built reporting pipelines — for finance teams")

        score = analyze_ats_compatibility(resume, JobDescription())

        self.assertTrue(any("em dashes" in suggestion for suggestion in score.suggestions))

    def test_long_role_is_flagged(self):
        resume = plain_resume()
        resume.experience[0].bullets = ["Built pipeline %d" % i for i in range(9)]
        scorer = ATSScorer(resume, JobDescription())

        suggestions = scorer.generate_suggestions(100, 100, 100, 100)

        self.assertIn('"Data Engineer" has 9 bullets', suggestions[0])

    def suggest(self, resume, job=None, keyword=100, fmt=100, sections=100, content=100):
        scorer = ATSScorer(resume, job or JobDescription())
        return scorer.generate_suggestions(keyword, fmt, sections, content)

    def test_low_keyword_match(self):
        self.assertIn(LOW_MATCH_TIP, self.suggest(Resume(summary="Python developer"), keyword=60))
        self.assertNotIn(LOW_MATCH_TIP, self.suggest(Resume(summary="Python developer"), keyword=75))

    def test_short_summary(self):
        self.assertIn(SUMMARY_TIP, self.suggest(Resume(summary="Python developer"), sections=80))
        self.assertNotIn(SUMMARY_TIP, self.suggest(Resume(summary="Python developer"), sections=90))

    def test_few_core_competencies(self):
        suggestions = self.suggest(Resume(summary="x" * 120), sections=80)

        self.assertIn(COMPETENCY_TIP, suggestions)
        self.assertNotIn(SUMMARY_TIP, suggestions)

    def test_low_bullet_density(self):
        resume = Resume(
            summary="x" * 150,
            core_competencies=["a", "b", "c", "d", "e"],
            experience=[ExperienceItem(title="Analyst", bullets=["One", "Two"])],
        )

        suggestions = self.suggest(resume, sections=80)

        self.assertIn(BULLET_TIP, suggestions)
        self.assertNotIn(SUMMARY_TIP, suggestions)
        self.assertNotIn(COMPETENCY_TIP, suggestions)

    def test_weak_verbs(self):
        resume = Resume(experience=[ExperienceItem(bullets=["Helped the team ship 20% more reports"])])

        suggestions = self.suggest(resume, content=80)

        self.assertIn(WEAK_VERB_TIP, suggestions)
        self.assertNotIn(METRICS_TIP, suggestions)

    def test_missing_metrics(self):
        resume = Resume(experience=[ExperienceItem(bullets=["Built the billing service"])])

        suggestions = self.suggest(resume, content=80)

        self.assertIn(METRICS_TIP, suggestions)
        self.assertNotIn(WEAK_VERB_TIP, suggestions)

    def test_leadership(self):
        job = JobDescription(text="You will manage team of five")

        self.assertIn(LEADERSHIP_TIP, self.suggest(Resume(summary="Python developer"), job))
        self.assertNotIn(LEADERSHIP_TIP, self.suggest(Resume(summary="Mentored two analysts"), job))

    def test_incorporate_missing_terms(self):
        job = JobDescription(required_skills=["kubernetes", "terraform", "sql", "docker"])

        suggestions = self.suggest(Resume(summary="Python developer"), job)

        self.assertIn("Consider incorporating these terms naturally: Kubernetes, Terraform, SQL", suggestions)

    def test_key_skills_above_the_fold(self):
        job = JobDescription(required_skills=["python", "spark", "sql"])

        self.assertIn(ABOVE_THE_FOLD_TIP, self.suggest(Resume(summary="Python developer"), job))
        self.assertNotIn(
            ABOVE_THE_FOLD_TIP,
            self.suggest(Resume(summary="Python, Spark and SQL developer"), job),
        )

    def test_recent_role_with_fewer_bullets(self):
        resume = Resume(experience=[
            ExperienceItem(title="Engineer", bullets=["One"]),
            ExperienceItem(title="Analyst", bullets=["One", "Two"]),
        ])

        self.assertIn(RECENT_ROLE_TIP, self.suggest(resume))

    def test_resume_length(self):
        self.assertIn(
            "Your resume is very short (~2 words). Add more detail to experience bullets "
            "to improve keyword density",
            self.suggest(Resume(summary="Python developer")),
        )
        self.assertIn(
            "Your resume is lengthy (~1000 words). Most ATS systems parse 1-2 pages best. "
            "Consider trimming older roles to 3 bullets each",
            self.suggest(Resume(summary="word " * 1000)),
        )

    def test_rule_order_and_cap(self):
        job = JobDescription(required_skills=["kubernetes", "terraform", "sql", "docker"])

        suggestions = self.suggest(Resume(summary="Python developer"), job, keyword=60, sections=80)

        # the incorporate-terms tip is skipped after five suggestions; the length tip is cut by the cap
        self.assertEqual(suggestions, [
            "Add these missing keywords from the job description: Kubernetes, Terraform, SQL, Docker",
            LOW_MATCH_TIP,
            SUMMARY_TIP,
            COMPETENCY_TIP,
            BULLET_TIP,
            ABOVE_THE_FOLD_TIP,
        ])


class ScoreReportTests(unittest.TestCase):
    def test_sub_scores_within_bounds(self):
        job = extract_job_description(SAMPLE_JOB)
        resumes = [Resume(), Resume.from_dict(SAMPLE_RESUME), plain_resume()]

        for resume in resumes:
            score = analyze_ats_compatibility(resume, job)
            for value in (score.overall, score.keyword_match, score.format_compatibility,
                          score.section_completeness, score.content_quality):
                self.assertGreaterEqual(value, 0)
                self.assertLessEqual(value, 100)
            self.assertEqual(
                score.overall,
                combine_scores(score.keyword_match, score.format_compatibility,
                               score.section_completeness, score.content_quality),
            )

    def test_scoring_is_deterministic(self):
        job = extract_job_description(SAMPLE_JOB)
        resume = Resume.from_dict(SAMPLE_RESUME)

        self.assertEqual(analyze_ats_compatibility(resume, job), analyze_ats_compatibility(resume, job))

    def test_tailored_resume_scores_well(self):
        score = analyze_ats_compatibility(Resume.from_dict(SAMPLE_RESUME), extract_job_description(SAMPLE_JOB))

        self.assertEqual(score.format_compatibility, 100)
        self.assertGreaterEqual(score.overall, 60)


if __name__ == "__main__":
    unittest.main()
