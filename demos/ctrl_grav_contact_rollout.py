"""
@package gravity_cost
@file ctrl_grav_contact_rollout.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Evaluates the contact-consistent gravity control cost along a trajectory
"""

'''
The robot (talos_arm) pushes on the environment with its fingertip.
A constant contact force is written in the shared data of every node,
then the cost and its derivatives are evaluated along a random rollout
around the gravity compensation torque, one cost data per node.
The gradient of the first node is checked against finite differences.
'''

import argparse
import os

import numpy as np
np.set_printoptions(precision=4, linewidth=180, suppress=True)
import crocoddyl
import pinocchio as pin
import example_robot_data

from gravity_cost import DataCollectorMultibodyWithForces, create_ctrl_reg_grav_cost, load_yaml_file
from gravity_cost.config import check_attribute

from gravity_cost.misc_utils import CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT
logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


REF_FRAMES = {'LOCAL': pin.LOCAL, 'WORLD': pin.WORLD, 'LOCAL_WORLD_ALIGNED': pin.LOCAL_WORLD_ALIGNED}


def parse_script(argv=None):
    PARSER = argparse.ArgumentParser()
    PARSER.add_argument("--robot_name", type=str, default='talos_arm', help="Name of the robot (example-robot-data)")
    PARSER.add_argument('--nu', type=int, default=None, help="Number of actuated joints (default nv)")
    return PARSER.parse_args(argv)


def main(robot_name, nu):
    # Read config file
    config_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config', robot_name+'_ctrl_grav_contact_rollout.yml')
    logger.info("Loading config file '"+str(config_file)+"'...")
    config = load_yaml_file(config_file)
    for key in ['dt', 'N_h', 'q0', 'dq0', 'WHICH_COSTS', 'ctrlRegGravWeight', 'contacts']:
        check_attribute(config, key)
    if('ctrlRegGrav' not in config['WHICH_COSTS']):
        logger.warning("'ctrlRegGrav' is not in WHICH_COSTS, nothing to evaluate")
        return
    # Robot and state
    robot = example_robot_data.load(robot_name)
    model = robot.model
    state = crocoddyl.StateMultibody(model)
    x0 = np.concatenate([np.asarray(config['q0']), np.asarray(config['dq0'])])
    N_h = config['N_h']
    dt = config['dt']
    weight = config['ctrlRegGravWeight']
    # Cost model shared by all the nodes
    cost = create_ctrl_reg_grav_cost(state, config, nu)
    logger.info("Created "+repr(cost))

    # One shared data (contact forces) and one cost data per node
    collectors = []
    for i in range(N_h):
        collector = DataCollectorMultibodyWithForces(model)
        for ct in config['contacts']:
            frameId = model.getFrameId(ct['contactModelFrameName'])
            ref = REF_FRAMES[ct.get('contactModelReferenceFrame', 'LOCAL')]
            collector.add_frame_force(model, frameId, np.asarray(ct['contactForceRef']), ref=ref, q=x0[:state.nq])
        collectors.append(collector)
    datas = [cost.createData(collector) for collector in collectors]

    # Rollout around the gravity compensation torque
    xs = [state.integrate(x0, 0.05*np.random.rand(state.ndx)) for i in range(N_h)]
    us = []
    for x, collector in zip(xs, collectors):
        g = pin.computeStaticTorque(model, model.createData(), x[:state.nq], collector.fext)
        us.append(g[:cost.nu] + 0.1*np.random.rand(cost.nu))
    costs = []
    for x, u, data in zip(xs, us, datas):
        cost.calc(data, x, u)
        cost.calcDiff(data, x, u)
        costs.append(data.cost)
    terminal = cost.createData(DataCollectorMultibodyWithForces(model))
    cost.calc(terminal, xs[-1])
    cost.calcDiff(terminal, xs[-1])
    logger.info("Running costs  = "+str(np.array(costs)))
    # Running costs are integrated over the horizon with the weight of the cost sum
    logger.info("Weighted total = "+str(dt * weight * np.sum(costs)))
    logger.info("Terminal cost  = "+str(terminal.cost))

    # Finite differences check on the first node
    data_nd = cost.createData(collectors[0])
    h = 1e-6
    Lx_nd = np.zeros(state.ndx)
    for i in range(state.ndx):
        dx = np.zeros(state.ndx) ; dx[i] = h
        cost.calc(data_nd, state.integrate(xs[0], dx), us[0])
        cp = data_nd.cost
        cost.calc(data_nd, state.integrate(xs[0], -dx), us[0])
        Lx_nd[i] = (cp - data_nd.cost) / (2*h)
    logger.info("|Lx - Lx_nd|   = "+str(np.linalg.norm(datas[0].Lx - Lx_nd)))
    logger.info("dg_dq (node 0) = \n"+str(datas[0].dg_dq))


if __name__=='__main__':
    args = parse_script()
    main(args.robot_name, args.nu)
