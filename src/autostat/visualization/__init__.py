"""Visualization and plotting module for the automobile tables."""

from .plotter import CarsPlotter

__all__ = ['CarsPlotter']
