from workforce.models.branch import Branch
from .entity_service import EntityService


class BranchService(EntityService[Branch]):
    """CRUD over the `branches` collection. Deleting a branch leaves its employees."""

    collection = "branches"
    entity_model = Branch
    entity_label = "Branch"
    not_found_code = "BRANCH_NOT_FOUND"
