"""
Tests for section segmentation: header detection, cross-contamination guards,
per-entry splitting and the headerless keyword fallback.
"""

from datetime import date

import pytest

from resume_dates.core.date_parser import ResumeDateParser
from resume_dates.core.section_segmenter import SectionSegmenter, detect_section_header

segmenter = SectionSegmenter(ResumeDateParser(today=date(2026, 10, 16)))


# ===== HEADER DETECTION =====

@pytest.mark.parametrize("line,expected", [
    ("EDUCATION", "education"),
    ("Education:", "education"),
    ("## Academic Background", "education"),
    ("educati on", "education"),
    ("E D U C A T I O N", "education"),
    ("Work Experience", "work"),
    ("PROFESSIONAL EXPERIENCE", "work"),
    ("Employment History", "work"),
    ("Technical Skills", "neutral"),
    ("Projects", "neutral"),
    ("Certifications", "neutral"),
    ("Career History", "work"),
    ("Career Objective", "neutral"),
    ("Career Summary", "neutral"),
    ("Summary of Qualifications", "neutral"),
    ("Education and Professional Development Programs", "education"),
])
def test_detect_section_header(line, expected):
    assert detect_section_header(line) == expected


@pytest.mark.parametrize("line", [
    "Career Fair Volunteer, 2019",
    "Led a cross-functional team to deliver an experience redesign for customers",
    "Software Engineer",
    "Skillsoft Inc",
    "Notes on my education and training",
    "",
])
def test_ordinary_lines_are_not_headers(line):
    assert detect_section_header(line) is None


# ===== SECTION-DRIVEN SPLITTING =====

RESUME = """Jane Doe
jane@example.com

EDUCATION
Bachelor of Science in Computer Science
State University, Sep 2014 - May 2018
- GPA 3.8
Master of Science, Tech Institute, 2018 - 2020

WORK EXPERIENCE
Acme Inc
Software Engineer
Jan 2020 - Present
- Built the billing platform
- Mentored two interns
Beta LLC, Junior Developer, Jun 2018 - Dec 2019

SKILLS
Python, Go, 2019 AWS certification
"""


def test_education_blocks_one_per_entry():
    blocks = segmenter.extract_education_sections(RESUME)
    assert blocks == [
        "Bachelor of Science in Computer Science\nState University, Sep 2014 - May 2018\n- GPA 3.8",
        "Master of Science, Tech Institute, 2018 - 2020",
    ]


def test_work_blocks_one_per_entry():
    blocks = segmenter.extract_work_sections(RESUME)
    assert blocks == [
        "Acme Inc\nSoftware Engineer\nJan 2020 - Present\n- Built the billing platform\n- Mentored two interns",
        "Beta LLC, Junior Developer, Jun 2018 - Dec 2019",
    ]


def test_neutral_header_closes_section():
    """Dates under SKILLS never leak into the work blocks."""
    blocks = segmenter.extract_work_sections(RESUME)
    assert not any("AWS" in block for block in blocks)


def test_other_domain_header_closes_section():
    text = "Experience\nAcme Corp, 2019 - 2021\nEducation\nState University, 2014 - 2018"
    assert segmenter.extract_work_sections(text) == ["Acme Corp, 2019 - 2021"]
    assert segmenter.extract_education_sections(text) == ["State University, 2014 - 2018"]


def test_title_after_dated_line_stays_with_entry():
    text = "Experience\nAcme Corp, 2019 - 2021\nData Analyst\n- Built dashboards\nBeta Inc, 2021 - Present\nLead Engineer"
    assert segmenter.extract_work_sections(text) == [
        "Acme Corp, 2019 - 2021\nData Analyst\n- Built dashboards",
        "Beta Inc, 2021 - Present\nLead Engineer",
    ]


def test_single_date_line_completes_entry():
    text = "Education\nState University, Bachelor of Arts, 2014\nGraduated 2018"
    assert segmenter.extract_education_sections(text) == [
        "State University, Bachelor of Arts, 2014\nGraduated 2018"
    ]


def test_bullet_with_date_does_not_open_entry():
    text = "Experience\nAcme Corp, 2015 - 2020\n- Promoted in 2017\n- Shipped v2"
    assert segmenter.extract_work_sections(text) == ["Acme Corp, 2015 - 2020\n- Promoted in 2017\n- Shipped v2"]


# ===== HEADERLESS FALLBACK =====

def test_headerless_single_line_entries():
    text = "Company A, Jan 2020 - Jan 2022\nCompany B, Jun 2021 - Present"
    assert segmenter.extract_work_sections(text) == [
        "Company A, Jan 2020 - Jan 2022",
        "Company B, Jun 2021 - Present",
    ]
    assert segmenter.extract_education_sections(text) == []


def test_headerless_keyword_line_takes_undated_context():
    text = "Northfield College\nBachelor of Arts\n2012 - 2016\n\nHobbies: chess"
    assert segmenter.extract_education_sections(text) == [
        "Northfield College\nBachelor of Arts\n2012 - 2016"
    ]


def test_fallback_resumes_after_neutral_header():
    """Keyword lines below a Summary header are still captured."""
    text = (
        "Summary\n"
        "Experienced engineer.\n"
        "Software Engineer, Acme Inc, Jan 2020 - Jan 2022\n"
        "University of Foo, Bachelor of Arts, 2014 - 2018"
    )
    assert segmenter.extract_work_sections(text) == [
        "Experienced engineer.\nSoftware Engineer, Acme Inc, Jan 2020 - Jan 2022"
    ]
    assert segmenter.extract_education_sections(text) == [
        "University of Foo, Bachelor of Arts, 2014 - 2018"
    ]


def test_objective_sentence_is_not_an_entry():
    text = (
        "Career Objective\n"
        "Seeking a role after finishing my degree in 2022 and 2023 travels\n"
        "\n"
        "Education\n"
        "State University, 2014 - 2018"
    )
    assert segmenter.extract_work_sections(text) == []
    assert segmenter.extract_education_sections(text) == ["State University, 2014 - 2018"]


def test_fallback_not_used_inside_other_section():
    """Inside a work section, a line mentioning 'school' is not an education block."""
    text = "Work Experience\nTeacher, Lincoln High School, 2015 - 2020"
    assert segmenter.extract_education_sections(text) == []


def test_empty_text():
    assert segmenter.extract_education_sections("") == []
    assert segmenter.extract_work_sections("   \n  ") == []
