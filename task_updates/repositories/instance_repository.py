import logging
from typing import Any

from task_updates.clients.nomad_client import NomadClient
from task_updates.models import Instance
from task_updates.utils.image_reference import parse_docker_ref
from task_updates.utils.logging import setup_logger

DOCKER_DRIVER = "docker"
RUNNING_STATUS = "running"


class InstanceRepository:
    def __init__(self, client: NomadClient):
        self.client: NomadClient = client
        self.logger: logging.Logger = setup_logger("InstanceRepository")

    def find_all(self, namespaces: list[str]) -> list[Instance]:
        instances: list[Instance] = []
        for namespace in namespaces:
            instances.extend(self.find_by_namespace(namespace))
        return sort_instances(instances)

    def find_by_namespace(self, namespace: str) -> list[Instance]:
        instances: list[Instance] = []
        for stub in self.client.list_allocations(namespace):
            if stub.get("ClientStatus") != RUNNING_STATUS:
                continue
            alloc = self.client.get_allocation(stub["ID"], stub.get("Namespace") or namespace)
            instances.extend(self._instances_from_allocation(stub, alloc))
        self.logger.info(f"Found {len(instances)} docker task instances in namespace {namespace or '*'}")
        return instances

    def _instances_from_allocation(self, stub: dict[str, Any], alloc: dict[str, Any]) -> list[Instance]:
        group = self._task_group(alloc)
        if group is None:
            self.logger.debug(f"Allocation {stub['ID']} has no task group {alloc.get('TaskGroup')}")
            return []

        instances = []
        for task in group.get("Tasks") or []:
            if task.get("Driver") != DOCKER_DRIVER:
                continue

            image = (task.get("Config") or {}).get("image")
            if not isinstance(image, str) or image.startswith("$"):
                self.logger.debug(f"Skipping task {task.get('Name')} with unresolved image {image!r}")
                continue
            try:
                reference = parse_docker_ref(image)
            except ValueError as e:
                self.logger.debug(f"Skipping task {task.get('Name')}: {e}")
                continue
            if not reference.tag:
                self.logger.debug(f"Skipping task {task.get('Name')} pinned by digest {reference}")
                continue

            instances.append(Instance(
                namespace=stub.get("Namespace", ""),
                job=stub.get("JobID", ""),
                group=group.get("Name", ""),
                task=task.get("Name", ""),
                image=reference,
            ))
        return instances

    @staticmethod
    def _task_group(alloc: dict[str, Any]) -> dict[str, Any] | None:
        name = alloc.get("TaskGroup")
        groups = (alloc.get("Job") or {}).get("TaskGroups") or []
        return next((g for g in groups if g.get("Name") == name), None)


def sort_instances(instances: list[Instance]) -> list[Instance]:
    # descending by namespace, job, group, task
    return sorted(instances, key=lambda i: (i.namespace, i.job, i.group, i.task), reverse=True)
