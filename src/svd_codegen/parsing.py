#
# Copyright (c) 2022 Nordic Semiconductor ASA
#
# SPDX-License-Identifier: Apache-2.0
#

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Type, Union

import lxml.etree as ET
from lxml import objectify

from . import bindings
from .errors import SvdParseError
from .model import Defaults, Device, Field, Peripheral, Register

log = logging.getLogger(__name__)


def parse(svd_path: Union[str, Path]) -> Device:
    """
    Parse a device described by a SVD file.

    :param svd_path: Path to the SVD file.

    :raises FileNotFoundError: If the SVD file does not exist.
    :raises SvdParseError: If an error occurred while parsing the SVD file.

    :return: Parsed `Device` representation of the SVD file.
    """

    svd_file = Path(svd_path)

    if not svd_file.is_file():
        raise FileNotFoundError(f"No such file: {svd_file.absolute()}")

    try:
        # Note: remove comments as otherwise these are present as nodes in the returned XML tree
        xml_parser = objectify.makeparser(remove_comments=True)
        xml_parser.set_element_class_lookup(_TagLookup(bindings.BINDINGS))

        with open(svd_file, "rb") as f:
            xml_device = objectify.parse(f, parser=xml_parser)

        device = _to_device(xml_device.getroot())

    except Exception as e:
        raise SvdParseError(f"Error parsing SVD file {svd_file}") from e

    log.info("Parsed %s: %d peripherals", device.name, len(device.peripherals))

    return device


def _to_device(element: bindings.DeviceElement) -> Device:
    props = element.register_properties
    defaults = Defaults(size=props.size, reset_value=props.reset_value, access=props.access)

    return Device(
        name=element.name.strip(),
        defaults=defaults,
        peripherals=tuple(_to_peripheral(p) for p in element.peripherals),
    )


def _to_peripheral(element: bindings.PeripheralElement) -> Peripheral:
    name = element.name.strip()

    if element.num_clusters:
        log.warning("%s: skipping %d register clusters", name, element.num_clusters)

    # Registers inherit register properties given at the peripheral level. Device level
    # properties are kept in the Defaults instead.
    base_props = element.register_properties
    registers = tuple(_to_register(r, base_props) for r in element.registers)

    return Peripheral(
        name=name,
        base_address=element.base_address,
        description=element.description,
        derived_from=element.derived_from,
        registers=registers,
    )


def _to_register(
    element: bindings.RegisterElement, base_props: bindings.RegisterProperties
) -> Register:
    props = element.register_properties.inherit(base_props)

    if element.has_fields:
        fields = tuple(_to_field(f) for f in element.fields)
    else:
        fields = None

    return Register(
        name=element.name.strip(),
        address_offset=element.offset,
        description=element.description,
        size=props.size,
        access=props.access,
        reset_value=props.reset_value,
        fields=fields,
    )


def _to_field(element: bindings.FieldElement) -> Field:
    return Field(
        name=element.name.strip(),
        bit_range=element.bit_range,
        description=element.description,
        access=element.access,
    )


class _TagLookup(ET.ElementNamespaceClassLookup):
    """
    XML element class lookup that maps the tag of an XML element to a binding class.
    Elements with other tags are handled by the default objectify lookup.
    """

    def __init__(self, element_classes: List[Type[bindings.SvdElement]]):
        """
        :param element_classes: lxml element classes to add to the lookup table.
        """
        super().__init__(objectify.ObjectifyElementClassLookup())

        namespace = self.get_namespace(None)  # note: None is the empty namespace

        for element_class in element_classes:
            # note: namespace is a decorator, so the syntax here is a little odd
            namespace(element_class.TAG)(element_class)
