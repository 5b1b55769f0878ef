"""
Names module behavioral tests.

Scope
- Validate ShortLong variants: widths, compact and expanded forms, ordering.
- Validate Named: alias parsing, order and duplicates, conversion to ShortLong.
- Validate the closed/final union rules.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from compass import Short, Long, Both, ShortLong, Named, Flag, Argument, NamelessError


class TestShortLongWidth(TestCase):
    """full_width() of every name variant."""

    def testShortWidthIsTwo(self):
        self.assertEqual(Short("v").full_width(), 2)

    def testLongWidthReservesShortColumn(self):
        for long in ("x", "color", "dry-run"):
            self.assertEqual(Long(long).full_width(), 6 + len(long))

    def testBothWidthMatchesLong(self):
        self.assertEqual(Both("v", "verbose").full_width(), 6 + len("verbose"))
        self.assertEqual(Both("v", "verbose").full_width(), Long("verbose").full_width())

    def testExpandedLengthEqualsWidth(self):
        for name in (Short("x"), Long("color"), Both("v", "verbose")):
            self.assertEqual(len(format(name, "#")), name.full_width())


class TestShortLongRendering(TestCase):
    """Compact and expanded forms."""

    def testCompactPrefersShort(self):
        self.assertEqual(str(Short("v")), "-v")
        self.assertEqual(str(Long("verbose")), "--verbose")
        self.assertEqual(str(Both("v", "verbose")), "-v")

    def testExpandedForms(self):
        self.assertEqual(format(Short("v"), "#"), "-v")
        self.assertEqual(format(Long("color"), "#"), "    --color")
        self.assertEqual(format(Both("v", "verbose"), "#"), "-v, --verbose")

    def testRenderFlag(self):
        self.assertEqual(Both("v", "verbose").render(), "-v")
        self.assertEqual(Both("v", "verbose").render(True), "-v, --verbose")

    def testInvalidFormatSpecRejected(self):
        with self.assertRaises(ValueError):
            format(Short("v"), "10")


class TestShortLongValues(TestCase):
    """Validation, immutability, equality and ordering."""

    def testShortMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            Short("vv")
        with self.assertRaises(ValueError):
            Short("-")
        with self.assertRaises(TypeError):
            Short(1)

    def testLongMustBeShellWord(self):
        with self.assertRaises(ValueError):
            Long("--verbose")
        with self.assertRaises(ValueError):
            Long("")
        with self.assertRaises(ValueError):
            Long("two words")

    def testFieldsAreReadOnly(self):
        name = Both("v", "verbose")
        with self.assertRaises(AttributeError):
            name.short = "x"

    def testEqualityAndHash(self):
        self.assertEqual(Both("v", "verbose"), Both("v", "verbose"))
        self.assertEqual(hash(Both("v", "verbose")), hash(Both("v", "verbose")))
        self.assertNotEqual(Short("v"), Long("v"))

    def testOrderingByVariantThenFields(self):
        names = [Both("a", "a"), Long("a"), Short("z"), Short("a")]
        self.assertEqual(sorted(names), [Short("a"), Short("z"), Long("a"), Both("a", "a")])

    def testPatternMatching(self):
        match Both("v", "verbose"):
            case Both(short, long):
                self.assertEqual((short, long), ("v", "verbose"))
            case _:
                self.fail("both did not match")

    def testRepr(self):
        self.assertEqual(repr(Both("v", "verbose")), "both(short='v', long='verbose')")

    def testVariantsAreFinal(self):
        with self.assertRaises(TypeError):
            type("Shorter", (Short,), {})

    def testUnionIsClosed(self):
        with self.assertRaises(TypeError):
            class Medium(ShortLong):
                pass


class TestNamed(TestCase):
    """The alias collaborator and its conversion."""

    def testAliasesKeepOrderAndDuplicates(self):
        named = Named("-v", "--verbose", "-V", "--verb", "-v")
        self.assertEqual(named.short, ("v", "V", "v"))
        self.assertEqual(named.long, ("verbose", "verb"))

    def testDefaults(self):
        named = Named("-v")
        self.assertIsNone(named.env)
        self.assertIsNone(named.help)

    def testMalformedAliasesRejected(self):
        for name in ("verbose", "-ab", "---x", "--"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Named(name)
        with self.assertRaises(TypeError):
            Named(1)

    def testEnvMustBeNonEmptyString(self):
        with self.assertRaises(ValueError):
            Named("-v", env=" ")
        with self.assertRaises(TypeError):
            Named("-v", env=1)

    def testEnvAcceptsNone(self):
        named = Named("-o", env=None)
        self.assertIsNone(named.env)
        self.assertEqual(named.item("OUT"), Argument(Short("o"), "OUT"))

    def testFromNamedSelectsFirstAliases(self):
        self.assertEqual(ShortLong.from_named(Named("-v", "-x")), Short("v"))
        self.assertEqual(ShortLong.from_named(Named("--verbose", "--loud")), Long("verbose"))
        self.assertEqual(ShortLong.from_named(Named("--verbose", "-v", "-x")), Both("v", "verbose"))

    def testFromNamedWithoutAliasesIsFatal(self):
        with self.assertRaises(NamelessError):
            ShortLong.from_named(Named(env="HOME"))

    def testNamelessErrorIsTypeError(self):
        with self.assertRaises(TypeError):
            ShortLong.from_named(Named())

    def testFromNamedRequiresNamed(self):
        with self.assertRaises(TypeError):
            ShortLong.from_named(("v", "verbose"))

    def testItemWithoutMetavarIsFlag(self):
        item = Named("-v", "--verbose", env="VERBOSE", help="talk more").item()
        self.assertEqual(item, Flag(Both("v", "verbose"), help="talk more"))

    def testItemWithMetavarIsArgument(self):
        item = Named("-o", env="OUTPUT", help="where to write").item("OUT")
        self.assertEqual(item, Argument(Short("o"), "OUT", env="OUTPUT", help="where to write"))

    def testItemWithoutAliasesIsFatal(self):
        with self.assertRaises(NamelessError):
            Named(env="OUTPUT").item("OUT")


if __name__ == '__main__':
    unittest.main()
