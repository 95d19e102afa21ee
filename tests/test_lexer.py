"""Unit tests for lexer module."""

import inspect
import unittest

from sles_pkg.lexer import LexError, Token, TokenKind, lex, tokenize


def kinds(text):
    tokens, _ = tokenize(text)
    return [token.kind for token, _ in tokens]


class TestTokens(unittest.TestCase):
    """Test token recognition."""

    def test_simple_equation(self):
        tokens, errors = tokenize("2x + 3.5y = 7")
        self.assertEqual(errors, [])
        self.assertEqual(
            [token for token, _ in tokens],
            [
                Token(TokenKind.NUMBER, 2.0),
                Token(TokenKind.VARIABLE, "x"),
                Token(TokenKind.ADD),
                Token(TokenKind.NUMBER, 3.5),
                Token(TokenKind.VARIABLE, "y"),
                Token(TokenKind.EQ),
                Token(TokenKind.NUMBER, 7.0),
            ],
        )

    def test_symbols(self):
        self.assertEqual(
            kinds("+-*/^()="),
            [
                TokenKind.ADD,
                TokenKind.SUB,
                TokenKind.MUL,
                TokenKind.DIV,
                TokenKind.POW,
                TokenKind.LPAREN,
                TokenKind.RPAREN,
                TokenKind.EQ,
            ],
        )

    def test_e_is_always_a_constant(self):
        self.assertEqual(kinds("e"), [TokenKind.E])
        self.assertEqual(kinds("ex"), [TokenKind.E, TokenKind.VARIABLE])

    def test_pi_spellings(self):
        self.assertEqual(kinds("pi PI"), [TokenKind.PI, TokenKind.PI])
        self.assertEqual(kinds("pix"), [TokenKind.PI, TokenKind.VARIABLE])

    def test_mixed_case_pi_is_two_variables(self):
        tokens, _ = tokenize("Pi")
        self.assertEqual(
            [token for token, _ in tokens],
            [Token(TokenKind.VARIABLE, "P"), Token(TokenKind.VARIABLE, "i")],
        )

    def test_adjacent_letters_are_separate_variables(self):
        tokens, _ = tokenize("xy")
        self.assertEqual([token.value for token, _ in tokens], ["x", "y"])

    def test_spans(self):
        tokens, _ = tokenize("12x = 3")
        self.assertEqual([span for _, span in tokens], [(0, 2), (2, 3), (4, 5), (6, 7)])


class TestNumbers(unittest.TestCase):
    """Test numeric literal rules."""

    def test_integer_and_decimal(self):
        tokens, _ = tokenize("42 0.25")
        self.assertEqual([token.value for token, _ in tokens], [42.0, 0.25])

    def test_no_sign_in_literal(self):
        self.assertEqual(kinds("-3"), [TokenKind.SUB, TokenKind.NUMBER])

    def test_trailing_point_is_not_part_of_number(self):
        tokens, errors = tokenize("1.")
        self.assertEqual([token.value for token, _ in tokens], [1.0])
        self.assertEqual([(error.text, span) for error, span in errors], [(".", (1, 2))])

    def test_leading_point_is_rejected(self):
        tokens, errors = tokenize(".5")
        self.assertEqual([token.value for token, _ in tokens], [5.0])
        self.assertEqual(len(errors), 1)

    def test_overflowing_literal_is_an_error(self):
        tokens, errors = tokenize("9" * 400)
        self.assertEqual(tokens, [])
        self.assertEqual(errors[0][0].reason, "number out of range")


class TestLexErrors(unittest.TestCase):
    """Test per-character failures."""

    def test_unknown_character(self):
        tokens, errors = tokenize("3 $ 4")
        self.assertEqual(len(tokens), 2)
        self.assertEqual(errors, [(LexError("$"), (2, 3))])

    def test_each_bad_character_reported(self):
        _, errors = tokenize("x # y @ 1")
        self.assertEqual([error.text for error, _ in errors], ["#", "@"])

    def test_whitespace_is_skipped(self):
        tokens, errors = tokenize("  x \t=\n 1 ")
        self.assertEqual(errors, [])
        self.assertEqual(len(tokens), 3)

    def test_lex_is_lazy(self):
        stream = lex("x = 1")
        self.assertTrue(inspect.isgenerator(stream))
        token, span = next(stream)
        self.assertEqual(token, Token(TokenKind.VARIABLE, "x"))
        self.assertEqual(span, (0, 1))


if __name__ == "__main__":
    unittest.main()
