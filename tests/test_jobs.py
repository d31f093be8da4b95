"""Tests for job ordering and row formatting."""

import pytest

from workflow_status.pipeline.jobs import (
    ICON_CANCELLED,
    ICON_FAILED,
    ICON_SUCCESS,
    build_job_rows,
    format_job_row,
    job_priority,
    sort_jobs,
    status_icon,
    truncate,
)


class TestJobPriority:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("cd / Build Init", 1),
            ("cd / [STG] Terraform Apply", 2),
            ("cd / [PROD] Terraform Apply", 3),
            ("Test Workflow", 4),
            # Earlier tags win when a name carries several.
            ("Build Init [PROD]", 1),
            ("[STG] then [PROD]", 2),
        ],
    )
    def test_buckets(self, name, expected):
        assert job_priority(name) == expected

    def test_tags_are_case_sensitive(self):
        assert job_priority("[stg] lowercase") == 4


class TestSortJobs:
    def test_four_bucket_order_is_stable(self, make_job):
        names = [
            "unit tests 2",
            "[PROD] apply 3",
            "[STG] apply 2",
            "Build Init",
            "[PROD] apply 1",
            "lint 1",
            "[STG] apply 1",
        ]
        ordered = [job.name for job in sort_jobs(make_job(name) for name in names)]

        # Input order within each bucket, not alphabetical.
        assert ordered == [
            "Build Init",
            "[STG] apply 2",
            "[STG] apply 1",
            "[PROD] apply 3",
            "[PROD] apply 1",
            "unit tests 2",
            "lint 1",
        ]

    def test_skipped_jobs_are_dropped(self, make_job):
        jobs = [make_job("build"), make_job("optional", "skipped"), make_job("deploy", "cancelled")]
        assert [job.name for job in sort_jobs(jobs)] == ["build", "deploy"]


class TestStatusIcon:
    @pytest.mark.parametrize(
        "conclusion, icon",
        [
            ("success", ICON_SUCCESS),
            ("cancelled", ICON_CANCELLED),
            ("skipped", ICON_CANCELLED),
            ("failure", ICON_FAILED),
            ("timed_out", ICON_FAILED),
            ("", ICON_FAILED),
        ],
    )
    def test_icons(self, conclusion, icon):
        assert status_icon(conclusion) == icon


class TestTruncate:
    def test_long_name_is_cut_to_63_chars(self):
        name = "x" * 70
        result = truncate(name)

        assert result == "x" * 63 + "..."
        assert len(result) == 66

    def test_exact_limit_is_untouched(self):
        assert truncate("y" * 63) == "y" * 63

    def test_custom_limit(self):
        assert truncate("abcdef", 3) == "abc..."


class TestFormatJobRow:
    def test_row_text(self, make_job):
        job = make_job("cd / [STG] Terraform Apply", seconds=90)
        row = format_job_row(job)

        assert row.text == f"✓ [cd / [STG] Terraform Apply]({job.html_url}) (1m 30s)"
        assert row.name == "cd / [STG] Terraform Apply"

    def test_failed_row_with_long_name(self, make_job):
        name = "cd / [PROD] Terraform Apply (ap-southeast-1/fpr-affiliate/fprdsaf/api-gateway/vpc-link/)"
        job = make_job(name, "failure", seconds=0)
        row = format_job_row(job)

        assert row.text == f"✗ [{name[:63]}...]({job.html_url}) (0s)"
        assert row.name == name

    def test_build_job_rows_sorts_and_filters(self, make_job):
        jobs = [make_job("deploy"), make_job("skip me", "skipped"), make_job("Build Init")]
        assert [row.name for row in build_job_rows(jobs)] == ["Build Init", "deploy"]
