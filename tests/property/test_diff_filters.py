"""
Property-based tests for ignore file parsing and diff filter construction.
"""

from hypothesis import given, strategies as st

from ai_review_action.git.ignore import parse_exclusions
from ai_review_action.git.repository import GitRepository


pattern = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(blacklist_categories=('Cs',), blacklist_characters='\r\n'),
)


class TestDiffFilters:
    """Property tests for exclusion handling."""

    @given(exclusions=st.lists(pattern, max_size=20))
    def test_one_negated_pathspec_per_exclusion(self, exclusions):
        """
        Property: N exclusions append exactly N ':!' arguments, in order.
        """
        command = GitRepository("/work").build_diff_command("main", "feature", exclusions)

        assert command[:5] == ["diff", "origin/main", "origin/feature", "--", "."]
        assert command[5:] == [f":!{p}" for p in exclusions]

    @given(exclusions=st.lists(pattern, max_size=20), blank_runs=st.lists(st.integers(0, 3), max_size=21))
    def test_blank_lines_never_become_exclusions(self, exclusions, blank_runs):
        """
        Property: parsing drops blank lines and keeps every other line in order.
        """
        lines = []
        for i, p in enumerate(exclusions):
            lines.extend([''] * (blank_runs[i] if i < len(blank_runs) else 0))
            lines.append(p)
        content = '\n'.join(lines)

        assert parse_exclusions(content) == exclusions
