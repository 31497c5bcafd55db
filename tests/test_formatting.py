import pytest

from core.formatting import explain_space, explain_time, rate, superscript
from core.models import ComplexityClass


def test_class_order():
    assert min(ComplexityClass, key=lambda c: c.rank) == ComplexityClass.CONSTANT
    assert ComplexityClass.LOGARITHMIC.rank < ComplexityClass.LINEAR.rank < ComplexityClass.QUADRATIC.rank
    assert [c.rank for c in ComplexityClass] == [0, 1, 2, 3, 4, 5]


@pytest.mark.parametrize(
    "time_class, space_class, expected",
    [
        (ComplexityClass.CONSTANT, ComplexityClass.CONSTANT, 5),
        (ComplexityClass.LOGARITHMIC, ComplexityClass.CONSTANT, 4),
        (ComplexityClass.LINEAR, ComplexityClass.LINEAR, 3),
        (ComplexityClass.CONSTANT, ComplexityClass.LINEAR, 3),
        (ComplexityClass.LINEARITHMIC, ComplexityClass.CONSTANT, 2),
        (ComplexityClass.QUADRATIC, ComplexityClass.LINEAR, 1),
        (ComplexityClass.EXPONENTIAL, ComplexityClass.CONSTANT, 1),
    ],
)
def test_rate(time_class, space_class, expected):
    assert rate(time_class, space_class) == expected


@pytest.mark.parametrize(
    "label, expected",
    [
        ("O(n^2)", "O(n<sup>2</sup>)"),
        ("O(2^n)", "O(2<sup>n</sup>)"),
        ("O(n log n)", "O(n log n)"),
        ("O(1)", "O(1)"),
    ],
)
def test_superscript(label, expected):
    assert superscript(label) == expected


def test_every_class_has_explanations():
    for cls in ComplexityClass:
        assert explain_time(cls)
        assert explain_space(cls)


def test_explanations_are_fixed_sentences():
    assert explain_time(ComplexityClass.QUADRATIC) == (
        "Detected nested iteration patterns suggesting O(n^2) behavior."
    )
    assert explain_space(ComplexityClass.CONSTANT) == (
        "No significant auxiliary structures; likely O(1) extra space."
    )
