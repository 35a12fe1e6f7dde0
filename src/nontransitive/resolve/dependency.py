"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


The dependency model: maven coordinates, the direct dependencies declared by
a project, and the manifest entries (with exclusions) computed for them.
"""

from collections import namedtuple


class Coordinate(namedtuple("Coordinate", "group_id artifact_id version")):
    """
    Identifies a maven artifact. Equality, hashing and ordering are based on
    all three components.
    """
    __slots__ = ()

    @property
    def ga(self):
        """
        The (group_id, artifact_id) tuple, the identity of this artifact
        regardless of its version.
        """
        return (self.group_id, self.artifact_id)

    def __str__(self):
        return "%s:%s:%s" % (self.group_id, self.artifact_id, self.version)


class ExclusionRecord(namedtuple("ExclusionRecord", "group_id artifact_id")):
    """
    A single <exclusion>: maven exclusions do not have a version.
    """
    __slots__ = ()

    def __str__(self):
        return "%s:%s" % (self.group_id, self.artifact_id)


"""
The components of a parsed maven artifact string - packaging and classifier
are None if the artifact string does not specify them.
"""
ParsedArtifact = namedtuple("ParsedArtifact", "coordinate packaging classifier")


class DirectDependency:
    """
    A dependency explicitly declared by a project.

    coordinate: the Coordinate of the declared dependency

    excluded_from_transitivity: True -> the transitives of this dependency
        must be excluded in the generated manifest
        False -> this dependency keeps its transitives, for example because
        it is built by the same project

    scope and classifier are carried along so that the manifest entry can be
    rendered, they do not influence the computed exclusions.
    """
    def __init__(self, coordinate, excluded_from_transitivity,
                 scope=None, classifier=None):
        assert isinstance(coordinate, Coordinate), "expected a Coordinate but got [%s]" % (coordinate,)
        self.coordinate = coordinate
        self.excluded_from_transitivity = excluded_from_transitivity
        self.scope = scope
        self.classifier = classifier

    @property
    def group_id(self):
        return self.coordinate.group_id

    @property
    def artifact_id(self):
        return self.coordinate.artifact_id

    @property
    def version(self):
        return self.coordinate.version

    def __str__(self):
        if self.excluded_from_transitivity:
            return str(self.coordinate)
        return "%s (transitive)" % self.coordinate

    def __repr__(self):
        return self.__str__()


class ManifestEntry:
    """
    The representation of a DirectDependency in the generated manifest: the
    dependency and the ordered ExclusionRecords to attach to it.
    """
    def __init__(self, dependency, exclusions=()):
        self.dependency = dependency
        self.exclusions = tuple(exclusions)

    @property
    def coordinate(self):
        return self.dependency.coordinate

    @property
    def has_exclusions(self):
        return len(self.exclusions) > 0

    def __eq__(self, other):
        return (isinstance(other, ManifestEntry) and
                self.coordinate == other.coordinate and
                self.exclusions == other.exclusions)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.coordinate, self.exclusions))

    def __str__(self):
        return "%s excludes %s" % (self.coordinate, [str(e) for e in self.exclusions])

    def __repr__(self):
        return self.__str__()


def parse_maven_art_str(maven_artifact_str):
    """
    Parses a maven artifact string, returns a ParsedArtifact instance.

    Supported formats:
      com.google.guava:guava:20.0
      com.squareup:javapoet:jar:1.11.1
      com.grail.servicelibs:dynamic-keystore-impl:jar:tests:2.0.39
    """
    num_coordinates = maven_artifact_str.count(':') + 1
    classifier = None
    packaging = None
    try:
        if num_coordinates == 3:
            group_id, artifact_id, version = maven_artifact_str.split(':')
        elif num_coordinates == 4:
            group_id, artifact_id, packaging, version = maven_artifact_str.split(':')
        else:
            group_id, artifact_id, packaging, classifier, version = maven_artifact_str.split(':')
    except Exception as e:
        raise Exception("cannot parse artifact specification [%s]" % maven_artifact_str) from e

    group_id = group_id.strip()
    artifact_id = artifact_id.strip()
    version = version.strip()
    if len(group_id) == 0 or len(artifact_id) == 0:
        raise Exception("invalid groupId or artifactId in artifact [%s]" % maven_artifact_str)
    if len(version) == 0:
        raise Exception("invalid version in artifact [%s]" % maven_artifact_str)

    return ParsedArtifact(Coordinate(group_id, artifact_id, version),
                          packaging, classifier)


def new_coord_from_maven_art_str(maven_artifact_str):
    return parse_maven_art_str(maven_artifact_str).coordinate


def new_exclusion_for(coordinate):
    return ExclusionRecord(coordinate.group_id, coordinate.artifact_id)
