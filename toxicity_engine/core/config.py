"""
Configuration management for the toxicity engine
"""

import os
from pathlib import Path
from typing import Dict, Any

from dotenv import load_dotenv


# Base paths
BASE_DIR = Path(__file__).parent.parent.parent

load_dotenv(BASE_DIR / ".env")


class Config:
    """Main configuration class for the clinical decision engine"""

    def __init__(self):
        # Question selection
        self.selection_config = {
            'drug_module_target_item_count': int(os.getenv('DRUG_MODULE_TARGET_ITEMS', 50)),
            'default_approach': os.getenv('QUESTIONNAIRE_APPROACH', 'drug_module'),
        }

        # Adaptive branching
        self.branching_config = {
            'seconds_per_question': 10,
        }

        # NCI composite grading
        self.grading_config = {
            'algorithm_version': 'NCI_v1.0',
            'burden_weights': [0, 3, 8, 15, 25],  # grades 0-4
            'burden_max_points': 200,             # 8 symptoms at grade 4
        }

        # Emergency detection
        self.alerting_config = {
            'multiple_moderate_threshold': 3,
        }

        # Triage queue
        self.triage_config = {
            'recent_completion_hours': 1,
            'nadir_heuristic_days': (7, 12),
        }

        # Logging
        self.logging_config = {
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        }

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get configuration for a specific section"""
        config_map = {
            'selection': self.selection_config,
            'branching': self.branching_config,
            'grading': self.grading_config,
            'alerting': self.alerting_config,
            'triage': self.triage_config,
            'logging': self.logging_config,
        }
        return config_map.get(section.lower(), {})

    def get_engine_config(self) -> Dict[str, Any]:
        """Flattened view consumed by ClinicalDecisionEngine"""
        engine_config: Dict[str, Any] = {}
        for section in ('selection', 'branching', 'grading', 'alerting', 'triage'):
            engine_config.update(self.get_section(section))
        return engine_config

    def update_config(self, section: str, updates: Dict[str, Any]) -> None:
        """Update a configuration section"""
        if hasattr(self, f'{section}_config'):
            config = getattr(self, f'{section}_config')
            config.update(updates)
        else:
            raise ValueError(f"Unknown configuration section: {section}")


# Global configuration instance
config = Config()
