"""Kinematics, TCP connection and line-drawing control for a SCARA robot simulator."""

__version__ = "0.1.0"
__all__ = ["connection", "kinematics", "controller", "cli"]