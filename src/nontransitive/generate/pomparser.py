"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


This is a helper module for pom processing - it contains methods dealing with
pom.xml parsing.
"""
from collections import namedtuple
from lxml import etree
from nontransitive.resolve import dependency
import re


# this is the indentation used when writing out pom content
INDENT = 4 # spaces


"""
A <dependency> declared in a pom. scope and classifier are None if the pom
does not specify them.
"""
ParsedDependency = namedtuple("ParsedDependency", "coordinate scope classifier")


def parse_pom(pom_content, remove_blank_text=False):
    """
    Parses the specified pom content and returns the root (<project>) element.
    """
    parser = etree.XMLParser(remove_blank_text=remove_blank_text)
    try:
        return etree.XML(pom_content.encode().strip(), parser=parser)
    except etree.XMLSyntaxError as e:
        raise Exception("cannot parse pom content: %s" % e) from e


def format_for_comparison(pom_content):
    """
    Returns the pom as a string without:
        - comments
        - superfluous whitespace
        - the root <description> element
    """
    parser = etree.XMLParser(remove_blank_text=True)
    tree = etree.XML(pom_content.encode().strip(), parser=parser)

    # remove <description>, if it exists
    for description_el in find_children(tree, "description"):
        tree.remove(description_el)

    # remove comments
    for c in tree.xpath("//comment()"):
        p = c.getparent()
        if p is not None:
            p.remove(c)

    return pretty_str(tree)


def parse_dependencies(pom_content):
    """
    Parses the <dependencies> section of the specified pom content.

    Returns a list of ParsedDependency instances, in the order they are
    declared in the pom.
    """
    project_el = parse_pom(pom_content)
    properties = get_properties(project_el)
    return [get_dependency_from_xml_element(el, properties) for el in
            get_dependency_elements(project_el)]


def get_properties(project_el):
    """
    Returns the properties that may be referenced as ${name} by dependency
    declarations: the <properties> of the pom, and the project's coordinates.
    """
    properties = {}
    for name in ("groupId", "artifactId", "version"):
        value = _get_child_text_value(project_el, name, False)
        if value is not None:
            properties["project.%s" % name] = value
    for props_el in find_children(project_el, "properties"):
        for prop_el in props_el.iterchildren(tag=etree.Element):
            if prop_el.text is not None:
                properties[etree.QName(prop_el).localname] = prop_el.text.strip()
    return properties


def get_dependency_elements(project_el):
    """
    Returns the <dependency> elements of the <dependencies> section of the
    specified <project> element. <dependencyManagement> is not considered.
    """
    dep_els = []
    for deps_el in find_children(project_el, "dependencies"):
        dep_els += find_children(deps_el, "dependency")
    return dep_els


def get_dependency_from_xml_element(el, properties=None):
    """
    Returns a ParsedDependency for the specified <dependency> element.
    ${name} references are resolved using the specified properties.
    """
    if properties is None:
        properties = {}
    group_id = _get_child_text_value(el, "groupId", True)
    artifact_id = _get_child_text_value(el, "artifactId", True)
    version = _get_child_text_value(el, "version", True)
    classifier = _get_child_text_value(el, "classifier", False)
    scope = _get_child_text_value(el, "scope", False)
    coord = dependency.Coordinate(_substitute(group_id, properties),
                                  _substitute(artifact_id, properties),
                                  _substitute(version, properties))
    return ParsedDependency(coord, scope, classifier)


def _substitute(value, properties):
    """
    Replaces ${name} references with property values. Unknown properties
    are left alone.
    """
    for match in re.finditer(r"\$\{(.*?)\}", value):
        name = match.group(1)
        if name in properties:
            value = value.replace(match.group(0), properties[name])
    return value


def find_children(el, name):
    """
    Returns the child elements with the specified name, regardless of the
    namespace the pom uses.
    """
    return el.xpath("*[local-name()=$name]", name=name)


def pretty_str(el):
    return etree.tostring(el, pretty_print=True).decode()


def _get_child_text_value(el, name, must_not_be_empty):
    children = find_children(el, name)
    text = None
    if len(children) == 1 and children[0].text is not None:
        text = children[0].text.strip()
        if len(text) == 0:
            text = None
    if must_not_be_empty and text is None:
        raise Exception("value of %s cannot be empty for %s" % (name, etree.tostring(el).decode()))
    return text
