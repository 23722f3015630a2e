import pytest

from analyzer.analysis.models import RawAuditResult
from tests.fakes import make_finding


@pytest.fixture()
def raw_result() -> RawAuditResult:
    return RawAuditResult(
        violations=[
            make_finding("image-alt", "critical", ["cat.text-alternatives", "wcag2a", "wcag111"],
                         '<img src="logo.png">'),
            make_finding("color-contrast", "serious", ["cat.color", "wcag2aa", "wcag143"],
                         '<p class="text-gray-400 bg-gray-300">Hi</p>'),
            make_finding("region", "moderate", ["cat.keyboard", "best-practice"], "<div>x</div>"),
        ],
        passes=[make_finding(f"pass-{i}", None) for i in range(6)],
        incomplete=[make_finding("aria-valid-attr-value", None)],
        inapplicable=[make_finding("audio-caption", None), make_finding("blink", None)],
        engine_version="4.10.2",
    )
