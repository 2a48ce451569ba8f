from order_console.db.models.service_specification import ServiceSpecification

__all__ = ["ServiceSpecification"]
