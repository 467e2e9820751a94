"""Ambient services shared by the bus, scan and repeater packages."""
