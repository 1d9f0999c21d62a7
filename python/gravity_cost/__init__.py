from gravity_cost.cost_control_grav import (CostModelControlGravAbstract,
                                            CostModelControlGravContact,
                                            CostModelControlGrav,
                                            CostDataControlGrav,
                                            CostDataControlGravContact)
from gravity_cost.data_collector import DataCollectorMultibodyWithForces
from gravity_cost.errors import GravityCostError, DimensionMismatchError, InvalidArgumentError, StaleStateError
from gravity_cost.config import load_yaml_file, create_ctrl_reg_grav_cost, add_ctrl_reg_grav_cost
