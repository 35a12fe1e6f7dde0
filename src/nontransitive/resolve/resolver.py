"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Computes the <exclusions> that make declared dependencies non-transitive.

A build may resolve its dependencies without their transitives, but a
consumer of the published pom resolves them transitively. To make the pom
behave like the build, every transitive of each non-transitive dependency has
to be excluded explicitly.
"""

from nontransitive.resolve import dependency


class NonTransitiveError(Exception):
    """
    Base class for the errors that abort manifest generation.
    """
    pass


class MissingClosureError(NonTransitiveError):
    """
    Raised when a dependency that must be made non-transitive has no known
    transitive closure. Without the closure, the exclusions cannot be
    computed, and a manifest without them would resolve differently than the
    build did.
    """
    def __init__(self, coordinate):
        super(MissingClosureError, self).__init__(
            "no transitive closure for non-transitive dependency [%s]" % (coordinate,))
        self.coordinate = coordinate


def compute_exclusions(direct_dependencies, closures):
    """
    Returns a list of dependency.ManifestEntry instances, one for each of the
    specified direct_dependencies, in the same order.

    Arguments:
        direct_dependencies: an iterable of dependency.DirectDependency
            instances
        closures: a mapping of dependency.Coordinate to the transitive
            closure of that coordinate (an iterable of Coordinate instances,
            including the coordinate itself). There must be an entry for each
            dependency that is excluded_from_transitivity.

    Raises MissingClosureError if a closure is missing. In that case nothing
    is returned for any of the dependencies.
    """
    entries = []
    # deps with the same coordinate have the same closure
    coord_to_exclusions = {}
    for dep in direct_dependencies:
        if not dep.excluded_from_transitivity:
            entries.append(dependency.ManifestEntry(dep))
            continue
        coord = dep.coordinate
        if coord not in coord_to_exclusions:
            if coord not in closures:
                raise MissingClosureError(coord)
            coord_to_exclusions[coord] = _get_exclusions(coord, closures[coord])
        entries.append(dependency.ManifestEntry(dep, coord_to_exclusions[coord]))
    return entries


def _get_exclusions(coord, closure):
    """
    Returns the sorted exclusions for the given coordinate and its closure.
    """
    if len(closure) <= 1:
        # the only artifact is the dependency itself
        return ()
    exclusions = set()
    for transitive in closure:
        if transitive.ga == coord.ga:
            continue # don't exclude the dependency itself
        # the same artifact may be in the closure multiple times, with
        # different versions
        exclusions.add(dependency.new_exclusion_for(transitive))
    return tuple(sorted(exclusions))
