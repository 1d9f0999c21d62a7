"""
@package gravity_cost
@file errors.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Exceptions raised by the gravity cost models
"""


class GravityCostError(Exception):
    '''
    Base class of all errors raised by this package
    '''


class DimensionMismatchError(GravityCostError, ValueError):
    '''
    State, control or weights vector of unexpected size
    '''


class InvalidArgumentError(GravityCostError, ValueError):
    '''
    Malformed construction arguments or incompatible shared data
    '''


class StaleStateError(GravityCostError, RuntimeError):
    '''
    calcDiff called without a matching calc on the same cost data
    '''
