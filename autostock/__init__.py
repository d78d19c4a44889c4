"""Autostock - registro de autos, documentos y presupuestos / dealership records."""
