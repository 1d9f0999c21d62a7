"""
@package gravity_cost
@file cost_control_grav.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Control regularization around the gravity compensation torque (with or without contacts)
"""

import numbers

import numpy as np
import crocoddyl
import pinocchio as pin

from gravity_cost.data_collector import get_external_forces
from gravity_cost.errors import DimensionMismatchError, InvalidArgumentError, StaleStateError

from gravity_cost.misc_utils import CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT
logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


def activation_hessian(activation_data, nr):
    '''
    Returns the activation Hessian as a dense (nr x nr) matrix
    '''
    Arr = np.asarray(activation_data.Arr)
    if(Arr.shape != (nr, nr)):
        raise DimensionMismatchError("Activation Hessian has shape "+str(Arr.shape)+", expected "+str((nr, nr)))
    return Arr


class CostModelControlGravAbstract(crocoddyl.CostModelAbstract):
    '''
    Cost a( r(x,u) ) with residual r = u - g(q) where u is padded with zeros
    up to nv (unactuated joints come last) and g is a gravity compensation torque.
    Children only define how g and its partial derivative w.r.t. q are computed.

    The model is not modified by calc / calcDiff, only the data is, so it can be
    shared by all the nodes of a shooting problem (e.g. added to a crocoddyl.CostModelSum)
    '''
    def __init__(self, state, activation=None, nu=None):
        # Allow (state, nu) as in crocoddyl's constructors
        if(isinstance(activation, numbers.Integral) and nu is None):
            nu, activation = activation, None
        if(not hasattr(state, 'pinocchio')):
            raise InvalidArgumentError("The state must be a multibody state (e.g. crocoddyl.StateMultibody)")
        if(nu is None):
            nu = state.nv
        if(isinstance(nu, bool) or not isinstance(nu, numbers.Integral)):
            raise InvalidArgumentError("nu must be an integer, got "+str(nu))
        if(nu <= 0 or nu > state.nv):
            raise InvalidArgumentError("nu must be in [1, "+str(state.nv)+"], got "+str(nu))
        if(activation is None):
            activation = crocoddyl.ActivationModelQuad(state.nv)
        if(not isinstance(activation, crocoddyl.ActivationModelAbstract)):
            raise InvalidArgumentError("The activation must be a crocoddyl activation model, got "+str(type(activation)))
        if(activation.nr != state.nv):
            raise InvalidArgumentError("nr is equal to "+str(activation.nr)+", it should be equal to nv = "+str(state.nv))
        crocoddyl.CostModelAbstract.__init__(self, state, activation, int(nu))
        self.pinocchio = state.pinocchio
        logger.debug("Created "+repr(self))

    def __repr__(self):
        return self.__class__.__name__+" {nu="+str(self.nu)+", activation="+self.activation.__class__.__name__+"}"

    @property
    def nr(self):
        return self.activation.nr

    def gravity(self, data, q):
        raise NotImplementedError()

    def gravity_derivatives(self, data, q):
        raise NotImplementedError()

    def createData(self, collector):
        raise NotImplementedError()

    def check_state(self, x):
        x = np.asarray(x, dtype=float)
        if(x.shape != (self.state.nx,)):
            raise DimensionMismatchError("x has wrong dimension (it should be "+str(self.state.nx)+"), got shape "+str(x.shape))
        return x

    def check_control(self, u):
        u = np.asarray(u, dtype=float)
        if(u.shape != (self.nu,)):
            raise DimensionMismatchError("u has wrong dimension (it should be "+str(self.nu)+"), got shape "+str(u.shape))
        return u

    def calc(self, data, x, u=None):
        '''
        Compute the residual u - g(q) and the cost. Without control (terminal node)
        this term does not contribute, see calcState
        '''
        if(u is None):
            return self.calcState(data, x)
        data.clear_evaluated()
        x = self.check_state(x)
        u = self.check_control(u)
        nu = self.nu
        q = x[:self.state.nq]
        data.g[:] = self.gravity(data, q)
        data.r[:nu] = u - data.g[:nu]
        data.r[nu:] = -data.g[nu:]
        self.activation.calc(data.activation, data.r)
        data.cost = data.activation.a_value
        data.set_evaluated(x, u)
        return data.cost

    def calcDiff(self, data, x, u=None):
        '''
        Compute the cost derivatives at the (x,u) of the last call to calc
          Rx = [-dg_dq, 0] , Ru = [I ; 0]
        '''
        if(u is None):
            return self.calcDiffState(data, x)
        x = self.check_state(x)
        u = self.check_control(u)
        if(not data.is_evaluated_at(x, u)):
            raise StaleStateError("calc must be called on this data with the same (x,u) and contact forces before calcDiff")
        nv = self.state.nv
        nu = self.nu
        ndx = self.state.ndx
        q = x[:self.state.nq]
        data._dg_dq[:,:] = self.gravity_derivatives(data, q)
        self.activation.calcDiff(data.activation, data.r)
        Ar = np.asarray(data.activation.Ar)
        Arr = activation_hessian(data.activation, self.nr)
        Rq = data.Rx[:,:nv]
        Rq[:,:] = -data._dg_dq
        # Gradient
        Lx = np.zeros(ndx)
        Lx[:nv] = Rq.T @ Ar
        data.Lx = Lx
        data.Lu = Ar[:nu].copy()
        # Hessian
        Lqq = Rq.T @ Arr @ Rq
        Lxx = np.zeros((ndx, ndx))
        Lxx[:nv,:nv] = 0.5 * (Lqq + Lqq.T)
        data.Lxx = Lxx
        data.Luu = 0.5 * (Arr[:nu,:nu] + Arr[:nu,:nu].T)
        Lxu = np.zeros((ndx, nu))
        Lxu[:nv,:] = Rq.T @ Arr[:,:nu]
        data.Lxu = Lxu

    def calcState(self, data, x):
        '''
        No control sample : the term contributes nothing (terminal node)
        '''
        data.clear_evaluated()
        x = self.check_state(x)
        data.r[:] = 0.
        data.cost = 0.
        data.set_evaluated(x, None)
        return data.cost

    def calcDiffState(self, data, x):
        x = self.check_state(x)
        ndx = self.state.ndx
        data.Rx[:,:] = 0.
        data.Lx = np.zeros(ndx)
        data.Lu = np.zeros(self.nu)
        data.Lxx = np.zeros((ndx, ndx))
        data.Luu = np.zeros((self.nu, self.nu))
        data.Lxu = np.zeros((ndx, self.nu))


class CostModelControlGravContact(CostModelControlGravAbstract):
    '''
    Residual r = u - g(q, fext) where g is the static torque balancing gravity and
    the external forces stored in the shared data by the contact models
      Constructors : (state, activation, nu), (state, activation), (state, nu), (state)
      Default nu is state.nv, default activation is a = 0.5*||r||^2
    '''
    def gravity(self, data, q):
        return pin.computeStaticTorque(self.pinocchio, data.pinocchio, q, data.fext)

    def gravity_derivatives(self, data, q):
        return pin.computeStaticTorqueDerivatives(self.pinocchio, data.pinocchio, q, data.fext)

    def createData(self, collector):
        return CostDataControlGravContact(self, collector)


class CostModelControlGrav(CostModelControlGravAbstract):
    '''
    Residual r = u - g(q) where g is the generalized gravity (no contact)
      Constructors : (state, activation, nu), (state, activation), (state, nu), (state)
    '''
    def gravity(self, data, q):
        return pin.computeGeneralizedGravity(self.pinocchio, data.pinocchio, q)

    def gravity_derivatives(self, data, q):
        return pin.computeGeneralizedGravityDerivatives(self.pinocchio, data.pinocchio, q)

    def createData(self, collector):
        return CostDataControlGrav(self, collector)


class CostDataControlGrav(crocoddyl.CostDataAbstract):
    '''
    Buffers of the gravity cost for one node. It keeps a reference to the shared
    data (collector) it was created with : the collector must outlive it
    '''
    def __init__(self, model, collector):
        if(not isinstance(collector, crocoddyl.DataCollectorAbstract)):
            raise InvalidArgumentError("The shared data must be a crocoddyl data collector, got "+str(type(collector)))
        pin_data = getattr(collector, 'pinocchio', None)
        if(pin_data is None):
            raise InvalidArgumentError("The shared data has no pinocchio data")
        nv = model.state.nv
        if(np.shape(pin_data.M) != (nv, nv) or len(pin_data.oMi) != model.pinocchio.njoints):
            raise InvalidArgumentError("The pinocchio data of the shared data does not match the state (nv = "+str(nv)+")")
        crocoddyl.CostDataAbstract.__init__(self, model, collector)
        self._shared = collector
        self.pinocchio = pin_data
        self._r = np.zeros(model.nr)
        self.g = np.zeros(nv)
        self._dg_dq = np.zeros((nv, nv))
        self._Rx = np.zeros((model.nr, model.state.ndx))
        self._Ru = np.zeros((model.nr, model.nu))
        self._Ru[:model.nu,:] = np.eye(model.nu)
        self._x = None
        self._u = None
        self._fext = None
        self._evaluated = False

    @property
    def shared(self):
        return self._shared

    @property
    def r(self):
        return self._r

    @property
    def Rx(self):
        return self._Rx

    @property
    def Ru(self):
        return self._Ru

    @property
    def dg_dq(self):
        '''
        Partial derivative of the gravity torque w.r.t. q (last calcDiff)
        '''
        view = self._dg_dq.view()
        view.flags.writeable = False
        return view

    def forces_snapshot(self):
        return None

    def clear_evaluated(self):
        self._evaluated = False

    def set_evaluated(self, x, u):
        self._x = x.copy()
        self._u = None if u is None else u.copy()
        self._fext = self.forces_snapshot()
        self._evaluated = True

    def is_evaluated_at(self, x, u):
        if(not self._evaluated or self._u is None):
            return False
        if(not (np.array_equal(self._x, x) and np.array_equal(self._u, u))):
            return False
        return np.array_equal(self._fext, self.forces_snapshot())


class CostDataControlGravContact(CostDataControlGrav):
    '''
    Same as CostDataControlGrav, the shared data must also hold the external forces (fext)
    '''
    def __init__(self, model, collector):
        fext = get_external_forces(collector)
        if(fext is None):
            raise InvalidArgumentError("The shared data has no external forces (fext)")
        if(len(fext) != model.pinocchio.njoints):
            raise InvalidArgumentError("fext has "+str(len(fext))+" forces, expected one per joint ("+str(model.pinocchio.njoints)+")")
        super().__init__(model, collector)

    @property
    def fext(self):
        return get_external_forces(self._shared)

    def forces_snapshot(self):
        return np.array([f.vector for f in self.fext])
