"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Decides which declared dependencies are made non-transitive.
"""

from nontransitive.common import logger
from nontransitive.resolve import dependency
from nontransitive.resolve import resolver


class VersionConflictError(resolver.NonTransitiveError):
    """
    Raised when the same artifact is declared with different versions.
    """
    def __init__(self, ga, versions):
        super(VersionConflictError, self).__init__(
            "conflicting versions for [%s:%s]: %s" % (ga[0], ga[1], ", ".join(versions)))
        self.ga = ga
        self.versions = tuple(versions)


class NonTransitivePolicy:
    """
    All declared dependencies are non-transitive, except for the ones that
    belong to one of the transitive_groups - typically the groupId of the
    project itself: those dependencies are built together with the project
    and keep their transitives.
    """
    def __init__(self, transitive_groups=()):
        self._transitive_groups = frozenset(transitive_groups)

    @property
    def transitive_groups(self):
        return self._transitive_groups

    def is_excluded_from_transitivity(self, coordinate):
        return coordinate.group_id not in self._transitive_groups

    def to_direct_dependencies(self, declared_dependencies, verbose=False):
        """
        Returns a list of dependency.DirectDependency instances, one for each
        of the specified declared dependencies, in the same order.

        A declared dependency is anything that has coordinate, scope and
        classifier attributes, for example a pomparser.ParsedDependency.
        """
        direct_deps = []
        for declared in declared_dependencies:
            excluded = self.is_excluded_from_transitivity(declared.coordinate)
            if verbose and not excluded:
                logger.debug("Dependency [%s] keeps its transitives" % (declared.coordinate,))
            direct_deps.append(dependency.DirectDependency(
                declared.coordinate, excluded,
                scope=declared.scope, classifier=declared.classifier))
        return direct_deps


def check_version_conflicts(direct_dependencies):
    """
    Raises a VersionConflictError if the specified direct dependencies
    reference the same non-transitive artifact with different versions.

    Transitive dependencies are not checked, they are resolved by the
    consumer of the manifest anyway.
    """
    ga_to_versions = {}
    for dep in direct_dependencies:
        if not dep.excluded_from_transitivity:
            continue
        versions = ga_to_versions.setdefault(dep.coordinate.ga, [])
        if dep.version not in versions:
            versions.append(dep.version)
    for ga, versions in ga_to_versions.items():
        if len(versions) > 1:
            raise VersionConflictError(ga, versions)
