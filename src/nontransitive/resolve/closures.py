"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause
"""

from nontransitive.common import logger


class ClosureRegistry:
    """
    This class collects the transitive closure of each distinct dependency
    coordinate. Closures are resolved outside of this library, for example
    by rules_jvm_external, and registered here.
    """
    def __init__(self, verbose=False):
        self._coord_to_closure = {}
        self._verbose = verbose

    def register_transitives(self, coordinate, transitives):
        """
        Registers the transitives of the specified coordinate, as an iterable
        of dependency.Coordinate instances. The coordinate itself does not
        need to be part of the transitives.

        If the coordinate has already been registered, the closures are
        merged.
        """
        assert coordinate is not None
        closure = set(transitives)
        closure.add(coordinate)
        previous = self._coord_to_closure.get(coordinate)
        if previous is not None:
            if self._verbose and previous != closure:
                logger.debug("Merging transitive closures of [%s]" % (coordinate,))
            closure.update(previous)
        self._coord_to_closure[coordinate] = frozenset(closure)

    def get_transitive_closure(self, coordinate):
        """
        Returns the transitive closure of the specified coordinate, including
        the coordinate itself, or None if nothing has been registered for it.
        """
        return self._coord_to_closure.get(coordinate)

    @property
    def closures(self):
        """
        The mapping of dependency.Coordinate -> frozenset of Coordinates.
        """
        return dict(self._coord_to_closure)

    def __len__(self):
        return len(self._coord_to_closure)
