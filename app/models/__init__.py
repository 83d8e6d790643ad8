from app.models.construction_stage import ConstructionStage

__all__ = [ "ConstructionStage" ]
