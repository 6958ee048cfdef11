"""
Database models for the Cornerstone scheduling service
Centralizes all SQLAlchemy model imports using factory pattern
"""
from .work_item import create_work_item_model
from .dependency import create_dependency_model
from .milestone import create_milestone_models


def init_models(db):
    """
    Initialize all models with the database instance

    Args:
        db: SQLAlchemy database instance

    Returns:
        dict: Dictionary containing all model classes
    """
    WorkItem = create_work_item_model(db)
    WorkItemDependency = create_dependency_model(db)
    Milestone, MilestoneWorkItem, WorkItemMilestoneDep = create_milestone_models(db)

    return {
        'WorkItem': WorkItem,
        'WorkItemDependency': WorkItemDependency,
        'Milestone': Milestone,
        'MilestoneWorkItem': MilestoneWorkItem,
        'WorkItemMilestoneDep': WorkItemMilestoneDep,
    }


__all__ = [
    'init_models',
    'create_work_item_model',
    'create_dependency_model',
    'create_milestone_models',
    # Model registry exports
    'model_registry',
    'get_models',
]

# Import registry for convenience
from .registry import model_registry, get_models
