"""
@package gravity_cost
@file config.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Build the gravity cost models from YAML config files
"""

import numpy as np
import yaml
import crocoddyl

from gravity_cost.cost_control_grav import CostModelControlGrav, CostModelControlGravContact
from gravity_cost.errors import DimensionMismatchError, InvalidArgumentError

from gravity_cost.misc_utils import CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT
logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


# Load a yaml file (e.g. OCP config file)
def load_yaml_file(yaml_file):
    '''
    Load config file (yaml)
    '''
    with open(yaml_file) as f:
        data = yaml.load(f, Loader=yaml.FullLoader)
    return data


def check_attribute(config, attribute):
    '''
    Check that a config dict contains a key, raise otherwise
    '''
    if(attribute not in config.keys()):
        logger.error("The config file must contain the key '"+str(attribute)+"'")
        raise InvalidArgumentError("Missing config key '"+str(attribute)+"'")


def create_ctrl_reg_grav_cost(state, config, nu=None):
    '''
    Create the control regularization cost around gravity from a config dict
      INPUT:
        state  : crocoddyl.StateMultibody
        config : dict from YAML config file. Used keys :
                   'ctrlRegGravWeights' (optional) : per-joint weights, activation a = 0.5*||w*r||^2
                   'contacts'           (optional) : if present and non-empty, gravity is balanced with the contact forces
        nu     : control dimension (default state.nv)
      OUTPUT:
        CostModelControlGravContact or CostModelControlGrav
    '''
    if(config is None or not hasattr(config, 'keys')):
        raise InvalidArgumentError("config must be a dict, got "+str(type(config)))
    if(nu is None):
        nu = config.get('nu', state.nv)
    # Weighted activation
    if('ctrlRegGravWeights' in config.keys() and config['ctrlRegGravWeights'] is not None):
        ctrlRegGravWeights = np.asarray(config['ctrlRegGravWeights'], dtype=float)
        if(ctrlRegGravWeights.shape != (state.nv,)):
            logger.error("'ctrlRegGravWeights' must have nv = "+str(state.nv)+" entries")
            raise DimensionMismatchError("ctrlRegGravWeights has shape "+str(ctrlRegGravWeights.shape)+", expected ("+str(state.nv)+",)")
        activation = crocoddyl.ActivationModelWeightedQuad(ctrlRegGravWeights**2)
    else:
        activation = crocoddyl.ActivationModelQuad(state.nv)
    # Contact or not ?
    contacts = config.get('contacts', None)
    if(contacts):
        logger.debug("Detected "+str(len(contacts))+" contacts : using CostModelControlGravContact")
        return CostModelControlGravContact(state, activation, nu)
    else:
        return CostModelControlGrav(state, activation, nu)


def add_ctrl_reg_grav_cost(costs, state, config, nu=None):
    '''
    Create the control regularization cost around gravity and add it to a cost sum
      INPUT:
        costs  : crocoddyl.CostModelSum of a running node
        state  : crocoddyl.StateMultibody
        config : dict from YAML config file, must contain 'ctrlRegGravWeight'
        nu     : control dimension (default costs.nu)
      OUTPUT:
        the cost model added under the name "ctrlRegGrav"
    '''
    check_attribute(config, 'ctrlRegGravWeight')
    if(nu is None):
        nu = config.get('nu', costs.nu)
    uRegGravCost = create_ctrl_reg_grav_cost(state, config, nu)
    # Add cost term to the sum
    costs.addCost("ctrlRegGrav", uRegGravCost, config['ctrlRegGravWeight'])
    return uRegGravCost
