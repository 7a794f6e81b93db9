"""Analyses of particle streams

:mod:`~particlestream.analysis.base`
    the Analysis base class

:mod:`~particlestream.analysis.registry`
    create analyses by name

:mod:`~particlestream.analysis.run`
    run analyses on a stream, also from the command line

:mod:`~particlestream.analysis.multiplicity`
    number of particles and impact parameter per event

:mod:`~particlestream.analysis.yields`
    number of particles per species

:mod:`~particlestream.analysis.spectrum`
    transverse momentum spectrum

"""
from . import base, multiplicity, registry, run, spectrum, yields
from .base import Analysis
from .registry import AnalysisRegistry, register_default_analyses
from .run import run_analyses, run_analysis

__all__ = ['Analysis',
           'AnalysisRegistry',
           'base',
           'multiplicity',
           'register_default_analyses',
           'registry',
           'run',
           'run_analyses',
           'run_analysis',
           'spectrum',
           'yields']
