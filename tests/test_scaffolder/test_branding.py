"""Tests for branding token substitution (projectforge.scaffolder.branding)."""

from __future__ import annotations

import re

import pytest

from projectforge.models import Branding, GeneratedFile
from projectforge.scaffolder.branding import (
    BRANDING_TOKENS,
    apply_branding,
    branding_values,
    substitute_tokens,
)

pytestmark = pytest.mark.unit


class TestBrandingValues:
    def test_includes_only_set_values(self):
        values = branding_values(Branding(primary_color="#F97316"), "Acme")
        assert values == {"{{projectName}}": "Acme", "{{primaryColor}}": "#F97316"}

    def test_all_tokens(self):
        branding = Branding(
            primary_color="#111111",
            secondary_color="#222222",
            background_color="#ffffff",
            text_color="#000000",
            font_family="Inter",
        )
        assert len(branding_values(branding, "Acme")) == 6


class TestApplyBranding:
    def test_replaces_every_occurrence(self):
        file = GeneratedFile(path="a.tsx", content="{{projectName}} / {{projectName}}")
        [branded] = apply_branding([file], Branding(primary_color="#F97316"), "Acme")
        assert branded.content == "Acme / Acme"

    def test_unset_token_left_untouched(self):
        file = GeneratedFile(path="a.css", content="color: {{secondaryColor}};")
        [branded] = apply_branding([file], Branding(primary_color="#F97316"), "Acme")
        assert branded.content == "color: {{secondaryColor}};"

    def test_file_without_tokens_is_returned_as_is(self):
        file = GeneratedFile(path="a.ts", content="export {};")
        [branded] = apply_branding([file], Branding(primary_color="#F97316"), "Acme")
        assert branded is file

    def test_overwrite_flag_preserved(self):
        file = GeneratedFile(path="a.ts", content="{{primaryColor}}", overwrite=False)
        [branded] = apply_branding([file], Branding(primary_color="#F97316"), "Acme")
        assert branded.overwrite is False
        assert branded.content == "#F97316"

    def test_unknown_token_is_not_touched(self):
        assert substitute_tokens("{{accentColor}}", {"{{primaryColor}}": "#000"}) == "{{accentColor}}"


class TestIdempotence:
    @pytest.fixture
    def full_branding(self) -> Branding:
        return Branding(
            primary_color="#111111",
            secondary_color="#222222",
            background_color="#ffffff",
            text_color="#000000",
            font_family="Inter",
        )

    def test_second_pass_is_a_no_op(self, full_branding):
        content = "\n".join(BRANDING_TOKENS)
        files = [
            GeneratedFile(path="tailwind.config.ts", content=content),
            GeneratedFile(path="app/layout.tsx", content="<title>{{projectName}}</title>"),
        ]

        once = apply_branding(files, full_branding, "Acme")
        twice = apply_branding(once, full_branding, "Acme")

        assert twice == once
        for file in twice:
            assert not re.search(r"\{\{\w+\}\}", file.content)
