"""Unit tests for polynomial module."""

import unittest

from mathpro_pkg.polynomial import (
    durand_kerner,
    evaluate_polynomial,
    factorize,
    find_roots,
    format_factor,
    format_root,
    interpolate,
    parse_polynomial,
    tokenize_polynomial,
)
from mathpro_pkg.types import (
    ComplexRootError,
    DegenerateCoefficientError,
    EmptyInputError,
    FormatError,
    SingularSystemError,
    UnsupportedDegreeError,
    ValidationError,
)


def roots_match(got, want, tol=1e-6):
    """Match roots ignoring order, each expected root used once."""
    if len(got) != len(want):
        return False
    unused = list(want)
    for root in got:
        for candidate in unused:
            if abs(root - candidate) < tol:
                unused.remove(candidate)
                break
        else:
            return False
    return True


class TestParsePolynomial(unittest.TestCase):
    """Test polynomial text parsing."""

    def test_constants(self):
        self.assertEqual(parse_polynomial("5"), [5])
        self.assertEqual(parse_polynomial("-3"), [-3])
        self.assertEqual(parse_polynomial("2.5"), [2.5])

    def test_linear(self):
        self.assertEqual(parse_polynomial("x"), [0, 1])
        self.assertEqual(parse_polynomial("-x"), [0, -1])
        self.assertEqual(parse_polynomial("+x"), [0, 1])
        self.assertEqual(parse_polynomial("2x"), [0, 2])
        self.assertEqual(parse_polynomial("2x+1"), [1, 2])

    def test_quadratic(self):
        self.assertEqual(parse_polynomial("x^2"), [0, 0, 1])
        self.assertEqual(parse_polynomial("-3x^2"), [0, 0, -3])
        self.assertEqual(parse_polynomial("x^2 - 5x + 6"), [6, -5, 1])

    def test_cubic(self):
        self.assertEqual(parse_polynomial("x^3 - 6x^2 + 11x - 6"), [-6, 11, -6, 1])

    def test_terms_accumulate(self):
        self.assertEqual(parse_polynomial("x + 2x"), [0, 3])
        self.assertEqual(parse_polynomial("x^2 + 1 - 3 + 2x^2"), [-2, 0, 3])

    def test_gaps_are_zero(self):
        self.assertEqual(parse_polynomial("x^4 - 1"), [-1, 0, 0, 0, 1])

    def test_decimal_magnitudes(self):
        self.assertEqual(parse_polynomial("1.5x^2 - .5"), [-0.5, 0, 1.5])

    def test_whitespace_is_ignored(self):
        self.assertEqual(parse_polynomial("  x ^ 2\t-  5 x +6 "), [6, -5, 1])

    def test_deterministic(self):
        text = "3x^3 - x + 7"
        self.assertEqual(parse_polynomial(text), parse_polynomial(text))

    def test_custom_variable(self):
        self.assertEqual(parse_polynomial("t^2 - 1", variable="t"), [-1, 0, 1])
        with self.assertRaises(FormatError):
            parse_polynomial("x^2 - 1", variable="t")

    def test_format_errors(self):
        for text in ["", "   ", "abc", "x^", "^2", "+", "x++1", "2*x", "x^-2"]:
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    parse_polynomial(text)

    def test_missing_operator_between_terms(self):
        for text in ["2x3", "x^2.5", "1.2.3", "x x"]:
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    parse_polynomial(text)

    def test_format_error_code(self):
        with self.assertRaises(FormatError) as ctx:
            parse_polynomial("x^")
        self.assertEqual(ctx.exception.code, "FORMAT_ERROR")
        self.assertIn("invalid polynomial format", str(ctx.exception))

    def test_input_too_long(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_polynomial("x+" * 6000 + "1")
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_degree_limit(self):
        for text in ["x^999999999999", "x^" + "9" * 5000, "x^51 + 1"]:
            with self.subTest(text=text[:20]):
                with self.assertRaises(ValidationError) as ctx:
                    parse_polynomial(text)
                self.assertEqual(ctx.exception.code, "DEGREE_TOO_HIGH")
        self.assertEqual(len(parse_polynomial("x^50 - 1")), 51)
        self.assertEqual(parse_polynomial("x^002"), [0, 0, 1])

    def test_tokenize_terms(self):
        terms = tokenize_polynomial("-3x^2+x-7")
        self.assertEqual([t.power for t in terms], [2, 1, 0])
        self.assertEqual([t.coefficient for t in terms], [-3.0, 1.0, -7.0])
        self.assertEqual(terms[0].text, "-3x^2")


class TestFindRoots(unittest.TestCase):
    """Test closed-form and iterative root finding."""

    def test_linear(self):
        self.assertEqual(find_roots([-4, 2]), [complex(2, 0)])
        self.assertEqual(find_roots([6, -3]), [complex(2, 0)])

    def test_quadratic_real_roots_plus_first(self):
        roots = find_roots([6, -5, 1])
        self.assertEqual(roots, [complex(3, 0), complex(2, 0)])

    def test_quadratic_complex_roots(self):
        roots = find_roots([1, 0, 1])
        self.assertTrue(roots_match(roots, [1j, -1j]))
        self.assertAlmostEqual(roots[0].imag, 1.0)
        self.assertAlmostEqual(roots[1].imag, -1.0)

    def test_cubic(self):
        roots = find_roots([-6, 11, -6, 1])
        self.assertEqual(len(roots), 3)
        self.assertTrue(roots_match(roots, [1, 2, 3]), roots)

    def test_real_rooted_cubic_separates_conjugate_start_pair(self):
        roots = find_roots([-6, 11, -6, 1])
        for root in roots:
            self.assertLess(abs(root.imag), 1e-9, roots)
        reals = sorted(round(root.real, 9) for root in roots)
        self.assertEqual(reals, [1, 2, 3])

    def test_cubic_non_monic(self):
        roots = find_roots([-12, 22, -12, 2])
        self.assertTrue(roots_match(roots, [1, 2, 3]), roots)

    def test_quartic_with_complex_pair(self):
        # (x^2 + 1)(x - 2)(x + 3)
        roots = find_roots([-6, 1, -5, 1, 1])
        self.assertTrue(roots_match(roots, [1j, -1j, 2, -3]), roots)

    def test_roots_satisfy_polynomial(self):
        coeffs = [-6, 11, -6, 1]
        for root in find_roots(coeffs):
            self.assertLess(abs(evaluate_polynomial(coeffs, root)), 1e-6)

    def test_empty(self):
        with self.assertRaises(EmptyInputError):
            find_roots([])

    def test_nonzero_constant_has_no_roots(self):
        self.assertEqual(find_roots([5]), [])

    def test_zero_constant(self):
        with self.assertRaises(DegenerateCoefficientError):
            find_roots([0])

    def test_degenerate_leading_coefficient(self):
        for coeffs in ([3, 0], [1, 2, 0], [1, 0, 0, 0]):
            with self.subTest(coeffs=coeffs):
                with self.assertRaises(DegenerateCoefficientError):
                    find_roots(coeffs)

    def test_iteration_cap_returns_last_iterate(self):
        roots = find_roots([-6, 11, -6, 1], max_iterations=1)
        self.assertEqual(len(roots), 3)

    def test_durand_kerner_does_not_mutate_input(self):
        coeffs = [-6.0, 11.0, -6.0, 1.0]
        durand_kerner(coeffs)
        self.assertEqual(coeffs, [-6.0, 11.0, -6.0, 1.0])


class TestFactorize(unittest.TestCase):
    """Test factorization into linear real factors."""

    def test_linear(self):
        self.assertEqual(factorize([-4, 2]), ["(x - 2.00)"])
        self.assertEqual(factorize([1, 1]), ["(x - -1.00)"])

    def test_linear_zero_root(self):
        self.assertEqual(factorize([0, 3]), ["(x - 0.00)"])

    def test_quadratic_ascending(self):
        self.assertEqual(factorize([6, -5, 1]), ["(x - 2.00)", "(x - 3.00)"])
        self.assertEqual(factorize([-6, 5, -1]), ["(x - 2.00)", "(x - 3.00)"])

    def test_double_root(self):
        self.assertEqual(factorize([1, -2, 1]), ["(x - 1.00)", "(x - 1.00)"])

    def test_custom_variable(self):
        self.assertEqual(factorize([-4, 2], "t"), ["(t - 2.00)"])

    def test_complex_roots(self):
        with self.assertRaises(ComplexRootError):
            factorize([1, 0, 1])

    def test_unsupported_degree(self):
        with self.assertRaises(UnsupportedDegreeError):
            factorize([-6, 11, -6, 1])
        with self.assertRaises(UnsupportedDegreeError):
            factorize([5])

    def test_empty(self):
        with self.assertRaises(EmptyInputError):
            factorize([])

    def test_degenerate(self):
        with self.assertRaises(DegenerateCoefficientError):
            factorize([3, 0])
        with self.assertRaises(DegenerateCoefficientError):
            factorize([1, 2, 0])

    def test_matches_factors_built_from_roots(self):
        for coeffs in ([-4, 2], [6, -5, 1], [-1, 0, 4], [2, -3, 1]):
            with self.subTest(coeffs=coeffs):
                roots = sorted(r.real for r in find_roots(coeffs))
                self.assertEqual(
                    factorize(coeffs), [format_factor(root) for root in roots]
                )


class TestInterpolate(unittest.TestCase):
    """Test Vandermonde interpolation."""

    def assertCoefficientsAlmostEqual(self, got, want, places=9):
        self.assertEqual(len(got), len(want))
        for g, w in zip(got, want):
            self.assertAlmostEqual(g, w, places=places)

    def test_line(self):
        self.assertCoefficientsAlmostEqual(interpolate([(0, 1), (1, 3)]), [1, 2])

    def test_parabola(self):
        self.assertCoefficientsAlmostEqual(
            interpolate([(0, 0), (1, 1), (2, 4)]), [0, 0, 1]
        )

    def test_single_point(self):
        self.assertCoefficientsAlmostEqual(interpolate([(2, 5)]), [5])

    def test_recovers_cubic_and_its_roots(self):
        coeffs = interpolate([(0, -6), (1, 0), (2, 0), (3, 0)])
        self.assertCoefficientsAlmostEqual(coeffs, [-6, 11, -6, 1])
        self.assertTrue(roots_match(find_roots(coeffs), [1, 2, 3]))

    def test_empty(self):
        with self.assertRaises(EmptyInputError):
            interpolate([])

    def test_repeated_x(self):
        with self.assertRaises(SingularSystemError):
            interpolate([(1, 2), (1, 3)])
        with self.assertRaises(SingularSystemError):
            interpolate([(0, 0), (1, 1), (1, 2)])

    def test_invalid_point(self):
        with self.assertRaises(ValidationError):
            interpolate([("a", 1)])
        with self.assertRaises(ValidationError):
            interpolate([(1,)])


class TestHelpers(unittest.TestCase):
    """Test evaluation and formatting helpers."""

    def test_evaluate_polynomial(self):
        self.assertEqual(evaluate_polynomial([6, -5, 1], 2), 0)
        self.assertEqual(evaluate_polynomial([6, -5, 1], 1j), complex(5, -5))

    def test_format_root(self):
        self.assertEqual(format_root(complex(2, 0)), "2")
        self.assertEqual(format_root(complex(-0.0, 1.0)), "0 + 1i")
        self.assertEqual(format_root(complex(1.5, -2.0)), "1.5 - 2i")
        self.assertEqual(format_root(complex(2.0000000001, 1e-12)), "2")

    def test_format_factor(self):
        self.assertEqual(format_factor(2.0), "(x - 2.00)")
        self.assertEqual(format_factor(-0.001), "(x - 0.00)")
        self.assertEqual(format_factor(1.005, "y"), "(y - 1.00)")


if __name__ == "__main__":
    unittest.main()
