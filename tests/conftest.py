import types

import numpy as np
import pytest
import crocoddyl
import pinocchio as pin

from gravity_cost import DataCollectorMultibodyWithForces


def _prepare(model):
    '''
    Bound the configuration and add a contact frame on the last joint
    '''
    model.lowerPositionLimit = -np.ones(model.nq)
    model.upperPositionLimit = np.ones(model.nq)
    model.addFrame(pin.Frame('contact', model.njoints - 1, 0, pin.SE3.Random(), pin.FrameType.OP_FRAME))
    return model


@pytest.fixture(autouse=True)
def seed():
    np.random.seed(1)


@pytest.fixture
def manipulator():
    return _prepare(pin.buildSampleModelManipulator())


@pytest.fixture
def humanoid():
    return _prepare(pin.buildSampleModelHumanoidRandom())


@pytest.fixture(params=['manipulator', 'humanoid'])
def pin_model(request):
    return request.getfixturevalue(request.param)


@pytest.fixture
def state(pin_model):
    return crocoddyl.StateMultibody(pin_model)


@pytest.fixture
def collector(pin_model):
    '''
    Shared data with a random contact force on the last frame
    '''
    collector = DataCollectorMultibodyWithForces(pin_model)
    frameId = pin_model.getFrameId('contact')
    collector.add_frame_force(pin_model, frameId, np.random.rand(6) * 20 - 10)
    return collector


@pytest.fixture
def contact_collector(pin_model, state):
    '''
    crocoddyl's shared data with a 3D contact on the last frame (forces in contacts.fext)
    and a collector of this package holding the same forces
    '''
    frameId = pin_model.getFrameId('contact')
    contacts = crocoddyl.ContactModelMultiple(state, state.nv)
    contacts.addContact("contact", crocoddyl.ContactModel3D(state, frameId, np.zeros(3), pin.LOCAL, state.nv, np.zeros(2)))
    pin_data = pin_model.createData()
    contacts_data = contacts.createData(pin_data)
    force = np.random.rand(3) * 20 - 10
    contacts.updateForce(contacts_data, force)
    reference = DataCollectorMultibodyWithForces(pin_model)
    reference.add_frame_force(pin_model, frameId, force)
    # Keep the pinocchio and contact data alive with the collector
    return types.SimpleNamespace(collector=crocoddyl.DataCollectorMultibodyInContact(pin_data, contacts_data),
                                 reference=reference,
                                 pin_data=pin_data,
                                 contacts=contacts,
                                 contacts_data=contacts_data)
