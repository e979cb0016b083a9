"""Shared fixtures for presentation core tests."""

import pytest

from presentation.content import PresentationContent


@pytest.fixture
def content_data():
    """A small but complete content document as it sits on disk."""
    return {
        "hero": {
            "name": "Ada Example",
            "title": "Platform Engineer",
            "tagline": "Building calm systems",
            "ctaText": "See the journey",
        },
        "strategy": {
            "headline": "Strategy",
            "description": "How I choose work",
            "points": ["Learn in public", "Ship small", "Measure"],
        },
        "timeline": [
            {
                "id": "uni",
                "role": "Student",
                "company": "State University",
                "dateRange": "2012 - 2016",
                "description": "Computer science",
                "phase": "education",
                "placeLabel": "University",
            },
            {
                "id": "first-job",
                "role": "Developer",
                "company": "Acme",
                "dateRange": "2016 - 2019",
                "description": "Backend services",
                "phase": "early",
                "shape": "circle",
                "children": [
                    {
                        "id": "intern",
                        "role": "Intern",
                        "company": "Lab",
                        "dateRange": "2015",
                        "description": "Summer internship",
                        "phase": "education",
                    }
                ],
            },
            {
                "id": "lead",
                "role": "Tech Lead",
                "company": "Globex",
                "dateRange": "2019 - now",
                "description": "Platform team",
                "phase": "current",
                "color": "rose",
                "position": {"x": 900, "y": 40},
            },
        ],
        "careerPathSteps": {
            "headline": "Path",
            "description": "Steps",
            "steps": [{"id": "s1", "number": 1, "title": "Start", "description": ""}],
        },
        "skills": [{"id": "py", "name": "Python", "category": "language"}],
        "projects": [{"id": "p1", "title": "Portal", "description": "", "outcomes": ["Faster deploys"]}],
        "lessons": [{"id": "l1", "number": 1, "headline": "Listen", "paragraph": "", "icon": "heart"}],
        "futureGoals": {
            "headline": "Next",
            "vision": "Mentor more",
            "goals": [{"id": "g1", "title": "Teach", "description": ""}],
            "ctaText": "Connect",
        },
    }


@pytest.fixture
def content(content_data):
    return PresentationContent.from_json_data(content_data)
