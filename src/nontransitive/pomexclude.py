"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


The cmdline entry-point: makes the dependencies of pom.xml files
non-transitive, by adding <exclusions> for all their transitives.
"""

from nontransitive.common import common
from nontransitive.common import logger
from nontransitive.config import config
from nontransitive.generate import pom
from nontransitive.generate import pomparser
from nontransitive.resolve import maveninstallparser
from nontransitive.resolve import policy as policym
from nontransitive.resolve import resolver
import argparse
import os
import sys


def main(args):
    args = _parse_arguments(args)

    repo_root = common.get_repo_root(args.repo_root)
    cfg = config.load(repo_root, args.verbose)
    if args.transitive_groups is not None:
        cfg = cfg.with_additional_transitive_groups(args.transitive_groups)
    pom_paths = [os.path.join(repo_root, p) for p in common.to_tuple(args.pom)]
    if len(pom_paths) == 0:
        raise Exception("No pom files specified: [%s]" % args.pom)

    registry = maveninstallparser.load_closures(
        cfg.get_maven_install_names_and_paths(repo_root), args.verbose)
    policy = policym.NonTransitivePolicy(cfg.transitive_groups)
    output_dir = _get_output_dir(args)

    for pom_path in pom_paths:
        pom_content = common.read_file(pom_path)
        entries = process_pom(pom_content, policy, registry.closures,
                              cfg.fail_on_version_conflict, args.verbose)
        if args.print_dependencies:
            sys.stdout.write(pom.DependenciesGen(entries).gen())
            continue
        updated_pom_content = pom.add_exclusions(pom_content, entries)
        if output_dir is None:
            dest_path = pom_path
        else:
            dest_path = _get_dest_path(output_dir, repo_root, pom_path)
        common.write_file(dest_path, updated_pom_content)
        num_exclusions = sum([len(e.exclusions) for e in entries])
        logger.info("Wrote pom file with %i exclusions to [%s]" % (num_exclusions, dest_path))


def process_pom(pom_content, policy, closures, fail_on_version_conflict=True,
                verbose=False):
    """
    Computes the manifest entries, with their exclusions, for the
    dependencies declared in the specified pom content.

    Returns a list of dependency.ManifestEntry instances, in pom order.
    """
    declared_deps = pomparser.parse_dependencies(pom_content)
    direct_deps = policy.to_direct_dependencies(declared_deps, verbose)
    if fail_on_version_conflict:
        policym.check_version_conflicts(direct_deps)
    entries = resolver.compute_exclusions(direct_deps, closures)
    if verbose:
        for entry in entries:
            if entry.has_exclusions:
                logger.debug(str(entry))
    return entries


def _parse_arguments(args):
    parser = argparse.ArgumentParser(description="Non-transitive dependencies for pom.xml files")
    parser.add_argument("--pom", type=str, required=True,
        help="The pom file(s) to process, relative to the repository root. Multiple comma-separated paths are supported.")
    parser.add_argument("--repo_root", type=str, required=False,
        help="The root of the repository")
    parser.add_argument("--destdir", type=str, required=False,
        help="The directory updated poms are written to, at their path relative to the repository root. If not set, poms are updated in place")
    parser.add_argument("--transitive_groups", type=str, required=False,
        help="Comma-separated groupIds of dependencies that keep their transitives, in addition to the configured ones")
    parser.add_argument("--print_dependencies", required=False, action="store_true",
        help="Writes the <dependencies> section, with exclusions, to stdout instead of updating poms")
    parser.add_argument("--verbose", required=False, action="store_true",
        help="Verbose output")
    return parser.parse_args(args)


def _get_dest_path(output_dir, repo_root, pom_path):
    """
    Poms keep their path relative to the repository root under the output
    directory, so module poms that share a file name do not overwrite each
    other.
    """
    rel_pom_path = os.path.relpath(pom_path, repo_root)
    if rel_pom_path.startswith(os.pardir + os.sep):
        raise Exception("pom file [%s] is not under the repository root [%s]" % (pom_path, repo_root))
    dest_path = os.path.join(output_dir, rel_pom_path)
    os.makedirs(os.path.dirname(dest_path), exist_ok=True)
    return dest_path


def _get_output_dir(args):
    if not args.destdir:
        return None
    destdir = os.path.realpath(args.destdir)
    if os.path.exists(destdir):
        if not os.path.isdir(destdir):
            raise Exception("[%s] is not a directory" % destdir)
    else:
        os.makedirs(destdir)
    return destdir


def cli():
    main(sys.argv[1:])


if __name__ == "__main__":
    cli()
