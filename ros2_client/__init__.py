"""ROS 2 names, wire time types, discovery info, log messages and .msg code generation."""

__version__ = "0.8.1"