# application/process/__init__.py
from application.process.builder import BusinessProcessBuilder
from application.process.business_process import BusinessProcess
from application.process.catalog import ProcessCatalog
from application.process.instance import BusinessProcessInstance

__all__ = [
    "BusinessProcessBuilder",
    "BusinessProcess",
    "BusinessProcessInstance",
    "ProcessCatalog",
]
