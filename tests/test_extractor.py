import time

import pytest
from pydantic import ValidationError

import app.services.extractor as extractor_module
from app.models.schemas import ExtractedRecord
from app.services.extractor import (
    MAX_EDUCATION,
    MAX_EXPERIENCE,
    MAX_SKILLS,
    extract_resume_data,
)


def test_extract_resume_data_full_sample(sample_resume):
    record = extract_resume_data(sample_resume)

    assert record.name == "Jane Smith"
    assert record.email == "jane.smith@gmail.com"
    assert record.phone == "+1-234-567-8900"
    assert record.location == "Austin, TX"
    assert record.skills == ("Python", "Django", "PostgreSQL", "AWS", "Docker", "Kubernetes")
    assert record.education == ("Bachelor of Science in Computer Science, MIT, 2015",)
    assert record.experience == (
        "Senior Engineer, Acme Corp 2019 - Present Led the platform team.",
        "Engineer, Beta LLC 2015 - 2019 Built internal tooling.",
    )


def test_empty_text_yields_empty_record():
    assert extract_resume_data("") == ExtractedRecord()
    assert extract_resume_data("   \n\n\t  ") == ExtractedRecord()


def test_extraction_is_deterministic(sample_resume):
    assert extract_resume_data(sample_resume) == extract_resume_data(sample_resume)


def test_record_is_immutable(sample_resume):
    record = extract_resume_data(sample_resume)
    with pytest.raises(ValidationError):
        record.name = "Someone Else"


def test_sequence_fields_respect_bounds():
    skills = ", ".join(f"Toolkit{i:02d}" for i in range(60))
    education = "\n".join(f"Master of Science {i}" for i in range(9))
    experience = "\n".join(f"Role {i} at Company {2000 + i}" for i in range(15))
    text = (
        f"Skills: {skills}\n\nEducation:\n{education}\n\nExperience:\n{experience}\n"
    )

    record = extract_resume_data(text)

    assert len(record.skills) == MAX_SKILLS
    assert len(record.education) == MAX_EDUCATION
    assert len(record.experience) == MAX_EXPERIENCE


# ---- name ----

def test_name_strips_honorifics():
    assert extractor_module._extract_name("\n\n  Mrs. Jane Doe  \nEngineer") == "Jane Doe"
    assert extractor_module._extract_name("prof alan turing") == "alan turing"
    assert extractor_module._extract_name("DR.Grace Hopper") == "Grace Hopper"


def test_name_keeps_names_that_start_like_honorifics():
    assert extractor_module._extract_name("Mrinal Sen") == "Mrinal Sen"
    assert extractor_module._extract_name("Drew Barry") == "Drew Barry"


# ---- email ----

def test_single_valid_email_returned_verbatim():
    text = "Reach me at Jane.Doe+jobs@Mail-Host.io for details."
    assert extractor_module._extract_email(text) == "Jane.Doe+jobs@Mail-Host.io"


def test_placeholder_emails_are_skipped():
    text = "user@example.com\nadmin@mail.domain.com\nreal.person@acme.io"
    assert extractor_module._extract_email(text) == "real.person@acme.io"


def test_no_email_returns_empty_string():
    assert extractor_module._extract_email("no contact details here") == ""


# ---- phone ----

def test_international_phone_has_eleven_digits():
    phone = extractor_module._extract_phone("+1-234-567-8900")
    assert sum(c.isdigit() for c in phone) == 11


def test_indian_grouped_phone():
    assert extractor_module._extract_phone("Mobile: 98765-43210") == "98765-43210"


def test_plain_ten_digit_phone():
    assert extractor_module._extract_phone("Phone: 5551234567") == "5551234567"


def test_international_number_outranks_later_ten_digit_run():
    text = "Phone: +91 98765 43210\nAlt: 5551234567"
    assert extractor_module._extract_phone(text) == "+91 98765 43210"


def test_short_digit_runs_are_not_phones():
    assert extractor_module._extract_phone("Order 123456789 shipped in 2019") == ""


# ---- location ----

def test_labeled_location():
    text = "Location: Austin, TX\nSkills: Python"
    assert extractor_module._extract_location(text) == "Austin, TX"


def test_gazetteer_location_falls_back_to_bare_city():
    text = "I am based in Mumbai with 5 years experience."
    assert extractor_module._extract_location(text) == "Mumbai"


def test_gazetteer_location_returns_short_context():
    text = "Jane Doe\nPune, Maharashtra\nSoftware developer"
    assert extractor_module._extract_location(text) == "Pune, Maharashtra"


def test_gazetteer_order_wins_over_document_order():
    text = "Chennai office\nMumbai HQ"
    assert extractor_module._extract_location(text) == "Mumbai HQ"


def test_label_without_letters_is_rejected():
    text = "Location: 12345\nMumbai"
    assert extractor_module._extract_location(text) == "Mumbai"


def test_city_state_pattern_skips_month_names():
    text = "John Roe\nJoined in March, QA lead\nPortland, OR"
    assert extractor_module._extract_location(text) == "Portland, OR"


def test_location_after_email_on_contact_line():
    text = "John Roe\njohn.roe@mail.com | Green Valley\nSummary"
    assert extractor_module._extract_location(text) == "Green Valley"


def test_label_longer_than_one_hundred_characters_is_rejected():
    text = "Location: " + "A" * 120 + "\nPune"

    assert extractor_module._location_from_label(text) == ""
    assert extractor_module._extract_location(text) == "Pune"


def test_contact_line_fragment_is_capped_at_fifty_characters():
    trailer = "Somewhere Along The Northern Coast Of The Great Lakes Region"
    text = f"John Roe\njohn.roe@mail.com | {trailer}\nSummary"

    assert len(trailer) > 50
    assert extractor_module._location_from_contact_line(text) == ""


def test_gazetteer_context_stays_on_the_city_line():
    text = "Jane Doe\nSenior developer, Hyderabad office\nNext line"
    assert extractor_module._location_from_gazetteer(text) == "Senior developer, Hyderabad office"


def test_location_scan_is_linear_on_long_text():
    text = "Hello World " * 4500 + "\nPortland, OR"
    assert len(text) > 50_000

    started = time.perf_counter()
    assert extractor_module._extract_location(text) == "Portland, OR"
    assert time.perf_counter() - started < 2.0


def test_no_location_returns_empty_string():
    assert extractor_module._extract_location("Nothing to see here") == ""


# ---- skills ----

def test_skills_from_comma_separated_section():
    skills = extractor_module._extract_skills("Skills: Python, React, Docker")

    assert {"Python", "React", "Docker"} <= set(skills)
    assert len(skills) == len(set(skills))
    assert skills.index("Python") < skills.index("React") < skills.index("Docker")


def test_skills_filter_fillers_and_numbers():
    skills = extractor_module._extract_skills("Skills: Python, and more, 2020, the rest, Go")

    assert "Python" in skills
    assert "Go" not in skills
    assert "and more" not in skills
    assert "2020" not in skills
    assert "the rest" not in skills


def test_skills_are_three_to_forty_nine_characters():
    skills = extractor_module._extract_skills("Skills:\nR, Go, AI, Golang, Python\n• C#; SQL")

    assert skills == ("Python", "Golang", "SQL")
    assert all(3 <= len(skill) <= 49 for skill in skills)


def test_prose_without_section_yields_no_short_skills():
    assert extractor_module._extract_skills("I love to go hiking and R&D work.") == ()


def test_skills_from_bullets():
    text = "Technical Skills\n• Terraform; Ansible | Helm\n* Observability tooling"
    skills = extractor_module._extract_skills(text)

    assert "Terraform" in skills
    assert "Ansible" in skills
    assert "Helm" in skills
    assert "Observability tooling" in skills


def test_skills_catalogue_over_whole_document_without_section():
    text = "Built services with Python and Docker on AWS."
    assert extractor_module._extract_skills(text) == ("Python", "AWS", "Docker")


def test_catalogue_terms_with_symbols_match():
    skills = extractor_module._extract_skills("Skills: C++ and C# on .NET Core\n")
    assert "C++" in skills
    assert ".NET Core" in skills
    assert "C#" not in skills


def test_catalogue_does_not_match_inside_words():
    skills = extractor_module._extract_skills("Worked on JavaScript tooling.")
    assert "JavaScript" in skills
    assert "Java" not in skills


# ---- education ----

def test_education_degree_entry():
    text = "Education\nBachelor of Science in Computer Science, MIT, 2015."
    education = extractor_module._extract_education(text)

    assert len(education) == 1
    assert education[0].startswith("Bachelor")


def test_education_falls_back_to_dated_lines():
    text = "Education\nState University 2010 - 2014\nHigh School\n"
    assert extractor_module._extract_education(text) == ("State University 2010 - 2014",)


def test_education_without_section_is_empty():
    assert extractor_module._extract_education("Bachelor of Arts, 2010") == ()


# ---- experience ----

def test_experience_two_dated_entries():
    text = (
        "Experience\n"
        "Software Engineer at Acme, 2018 - 2021\n"
        "Built payment APIs\n"
        "Staff Engineer at Globex, 2021 - 2024\n"
        "Led the data team\n"
    )
    experience = extractor_module._extract_experience(text)

    assert len(experience) == 2
    assert "2018" in experience[0]
    assert "Built payment APIs" in experience[0]
    assert "2021 - 2024" in experience[1]


def test_experience_header_line_is_not_an_entry():
    text = "Work Experience:\nAnalyst, Initech 2012 - present\nTPS reports\n"
    assert extractor_module._extract_experience(text) == ("Analyst, Initech 2012 - present TPS reports",)


def test_experience_keeps_first_line_when_section_starts_mid_sentence():
    text = "Summary\n5 years of\nexperience with Python\nBuilt APIs for banks\n"
    assert extractor_module._extract_experience(text) == (
        "experience with Python Built APIs for banks",
    )


def test_experience_undated_lines_group_into_one_entry():
    text = "Experience\nFreelance consulting for small businesses\nBuilt websites and shops\n"
    assert extractor_module._extract_experience(text) == (
        "Freelance consulting for small businesses Built websites and shops",
    )


def test_experience_without_section_is_empty():
    assert extractor_module._extract_experience("Engineer at Acme 2019") == ()
