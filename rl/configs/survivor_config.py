"""
Training configuration for the survivor environment
"""

# Game rules handed to SurvivorConfig.from_dict
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "movement": "direct",
    "spawn_probability": 0.02,
    "kill_reward": 10,
    "contact_damage": 20,
    "edge_exit_ends_game": False,
}

# Reward shaping
REWARD_CONFIG = {
    "R_KILL": 1.0,       # Reward for destroying an enemy
    "R_DAMAGE": 0.05,    # Penalty per point of health lost
    "R_SHOT": 0.01,      # Penalty for shooting (encourage efficiency)
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 5.0,      # Death penalty
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "game_config": GAME_CONFIG,
    "max_steps": 3600,  # 60 seconds at 60 ticks/s
    "k_enemies": 5,
    "shoot_cooldown_steps": 6,
    "rewards": REWARD_CONFIG,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
