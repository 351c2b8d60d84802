"""Adapters module: conversion between host keyframe curves and samples."""

from .base import HostCurveAdapter, MIN_SAMPLE_COUNT, MAX_SAMPLE_COUNT
from .keyframes import KeyframeCurveAdapter, keyframe_curve, compressed_from_host_curve

__all__ = [
    "HostCurveAdapter",
    "MIN_SAMPLE_COUNT",
    "MAX_SAMPLE_COUNT",
    "KeyframeCurveAdapter",
    "keyframe_curve",
    "compressed_from_host_curve",
]
