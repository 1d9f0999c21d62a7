"""
@package gravity_cost
@file data_collector.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Shared multibody data (pinocchio data + external forces) read by the gravity cost models
"""

import numpy as np
import crocoddyl
import pinocchio as pin

from gravity_cost.errors import DimensionMismatchError, InvalidArgumentError

from gravity_cost.misc_utils import CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT
logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


class DataCollectorMultibodyWithForces(crocoddyl.DataCollectorMultibody):
    '''
    Shared data of one node of the shooting problem : pinocchio data and
    the external forces (expressed at joint level) produced by the contact stage.
    The cost data only keeps references to it, so it must outlive them.
    The forces are a Python attribute : they are lost if crocoddyl passes this
    collector back to Python (e.g. CostModelSum.createData), use crocoddyl's
    DataCollectorMultibodyInContact there
    '''
    def __init__(self, pin_model, pin_data=None):
        self._pin_data = pin_data if pin_data is not None else pin_model.createData()
        crocoddyl.DataCollectorMultibody.__init__(self, self._pin_data)
        self.fext = [pin.Force.Zero() for _ in range(pin_model.njoints)]

    def reset_forces(self):
        for i in range(len(self.fext)):
            self.fext[i] = pin.Force.Zero()

    def add_frame_force(self, pin_model, frameId, force, ref=pin.LOCAL, q=None):
        '''
        Apply a contact force (3D) or wrench (6D) at a frame, i.e. add its
        joint-level expression to fext[parent joint].
          force : expressed in the frame (LOCAL), or in LOCAL_WORLD_ALIGNED / WORLD.
                  The last two require the configuration q to get the frame placement
        '''
        if(frameId >= len(pin_model.frames)):
            raise InvalidArgumentError("Unknown frame id "+str(frameId))
        if(not isinstance(force, pin.Force)):
            force = np.asarray(force, dtype=float)
            if(force.shape == (3,)):
                force = pin.Force(force, np.zeros(3))
            elif(force.shape == (6,)):
                force = pin.Force(force)
            else:
                raise DimensionMismatchError("Contact force must be 3D or 6D, got shape "+str(force.shape))
        # Express in LOCAL
        if(ref != pin.LOCAL):
            if(q is None):
                raise InvalidArgumentError("The configuration q is needed for a force expressed in "+str(ref))
            pin.forwardKinematics(pin_model, self._pin_data, q)
            oMf = pin.updateFramePlacement(pin_model, self._pin_data, frameId)
            if(ref == pin.LOCAL_WORLD_ALIGNED):
                oRf = oMf.rotation
                force = pin.Force(oRf.T @ force.linear, oRf.T @ force.angular)
            else:
                force = oMf.actInv(force)
        frame = pin_model.frames[frameId]
        parentId = frame.parentJoint if hasattr(frame, 'parentJoint') else frame.parent
        self.fext[parentId] = self.fext[parentId] + frame.placement.act(force)
        return self.fext[parentId]


def get_external_forces(collector):
    '''
    Returns the list of joint forces held by a shared data, either directly
    or in its contact data (crocoddyl's DataCollectorMultibodyInContact)
    '''
    if(hasattr(collector, 'fext')):
        return collector.fext
    contacts = getattr(collector, 'contacts', None)
    if(contacts is not None and hasattr(contacts, 'fext')):
        return contacts.fext
    return None
