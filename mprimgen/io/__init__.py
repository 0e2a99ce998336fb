"""Serialization of primitive tables."""

from mprimgen.io.mprim_writer import dump_mprim, format_mprim, write_mprim

__all__ = ["dump_mprim", "format_mprim", "write_mprim"]
