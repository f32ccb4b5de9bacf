"""Bluetooth Low Energy host building blocks: UUIDs, byte cursors, characteristic properties, advertising data and size configuration."""

__version__ = "0.1.0"

__all__ = ["advertise", "codec", "config", "props", "uuid"]