"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause
"""

from nontransitive.resolve import dependency
import unittest


class DependencyTest(unittest.TestCase):

    def test_coordinate__three_coordinates(self):
        art = dependency.parse_maven_art_str("com.google.guava:guava:20.0")

        self.assertEqual(dependency.Coordinate("com.google.guava", "guava", "20.0"), art.coordinate)
        self.assertIsNone(art.packaging)
        self.assertIsNone(art.classifier)

    def test_coordinate__four_coordinates(self):
        art = dependency.parse_maven_art_str("com.squareup:javapoet:jar:1.11.1")

        self.assertEqual(dependency.Coordinate("com.squareup", "javapoet", "1.11.1"), art.coordinate)
        self.assertEqual("jar", art.packaging)
        self.assertIsNone(art.classifier)

    def test_coordinate__five_coordinates(self):
        art = dependency.parse_maven_art_str("com.grail.servicelibs:dynamic-keystore-impl:jar:tests:2.0.39")

        self.assertEqual("2.0.39", art.coordinate.version)
        self.assertEqual("jar", art.packaging)
        self.assertEqual("tests", art.classifier)

    def test_coordinate__too_few_coordinates(self):
        with self.assertRaises(Exception) as ctx:
            dependency.new_coord_from_maven_art_str("com.google.guava:guava")

        self.assertIn("cannot parse artifact specification", str(ctx.exception))

    def test_coordinate__empty_version(self):
        with self.assertRaises(Exception) as ctx:
            dependency.new_coord_from_maven_art_str("com.google.guava:guava: ")

        self.assertIn("invalid version", str(ctx.exception))

    def test_coordinate__structural_equality(self):
        c1 = dependency.new_coord_from_maven_art_str("g1:a1:1.0")
        c2 = dependency.Coordinate("g1", "a1", "1.0")
        c3 = dependency.Coordinate("g1", "a1", "1.1")

        self.assertEqual(c1, c2)
        self.assertEqual(hash(c1), hash(c2))
        self.assertNotEqual(c1, c3)
        self.assertEqual(c1.ga, c3.ga)
        self.assertEqual(2, len({c1, c2, c3}))

    def test_coordinate__str(self):
        self.assertEqual("g1:a1:1.0", str(dependency.Coordinate("g1", "a1", "1.0")))

    def test_exclusion_record__no_version(self):
        exclusion = dependency.new_exclusion_for(dependency.Coordinate("g1", "a1", "1.0"))

        self.assertEqual(dependency.ExclusionRecord("g1", "a1"), exclusion)
        self.assertEqual("g1:a1", str(exclusion))

    def test_exclusion_record__ordering(self):
        exclusions = [dependency.ExclusionRecord("org.b", "a"),
                      dependency.ExclusionRecord("org.a", "z"),
                      dependency.ExclusionRecord("org.a", "b")]

        self.assertEqual([("org.a", "b"), ("org.a", "z"), ("org.b", "a")],
                         sorted(exclusions))

    def test_direct_dependency__requires_coordinate(self):
        with self.assertRaises(AssertionError):
            dependency.DirectDependency("g1:a1:1.0", True)

    def test_manifest_entry(self):
        coord = dependency.Coordinate("g1", "a1", "1.0")
        dep = dependency.DirectDependency(coord, True, scope="test")
        entry = dependency.ManifestEntry(dep, [dependency.ExclusionRecord("g2", "a2")])

        self.assertEqual(coord, entry.coordinate)
        self.assertTrue(entry.has_exclusions)
        self.assertEqual((dependency.ExclusionRecord("g2", "a2"),), entry.exclusions)
        self.assertFalse(dependency.ManifestEntry(dep).has_exclusions)


if __name__ == '__main__':
    unittest.main()
