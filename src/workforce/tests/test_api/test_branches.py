from workforce.core.logging.middleware import REQUEST_ID_HEADER

BRANCHES = "/api/v1/branches"
MAIN_BRANCH = {"name": "Main", "address": "123 Main St", "phone": "555-0100"}


def create_main_branch(client) -> dict:
    resp = client.post(BRANCHES, json=MAIN_BRANCH)
    assert resp.status_code == 201
    return resp.json()["data"]


class TestBranchRoutes:

    def test_list_empty(self, client):
        resp = client.get(BRANCHES)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Branches Retrieved", "data": []}

    def test_create_then_get(self, client):
        created = create_main_branch(client)

        resp = client.get(f"{BRANCHES}/{created['id']}")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Branch Retrieved", "data": {"id": created["id"], **MAIN_BRANCH}}

    def test_create_response_echoes_payload_with_id(self, client):
        resp = client.post(BRANCHES, json=MAIN_BRANCH)

        body = resp.json()
        assert body["message"] == "Branch Created"
        assert body["data"]["id"]
        assert {k: v for k, v in body["data"].items() if k != "id"} == MAIN_BRANCH

    def test_update_merges_fields(self, client):
        """
        Behavior:
            - PUT with only `phone` keeps name and address
            - the response is the stored state after the write
        """
        created = create_main_branch(client)

        resp = client.put(f"{BRANCHES}/{created['id']}", json={"phone": "555-0200"})

        assert resp.status_code == 200
        assert resp.json() == {
            "message": "Branch Updated",
            "data": {"id": created["id"], "name": "Main", "address": "123 Main St", "phone": "555-0200"},
        }

    def test_delete_then_get_is_404(self, client):
        created = create_main_branch(client)

        resp = client.delete(f"{BRANCHES}/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Branch Deleted"}

        resp = client.get(f"{BRANCHES}/{created['id']}")
        assert resp.status_code == 404
        assert resp.json()["code"] == "BRANCH_NOT_FOUND"

    def test_delete_ghost_id(self, client):
        resp = client.delete(f"{BRANCHES}/ghost-id")

        assert resp.status_code == 404
        assert resp.json() == {"message": "Branch with id ghost-id not found", "code": "BRANCH_NOT_FOUND"}

    def test_update_ghost_id(self, client):
        resp = client.put(f"{BRANCHES}/ghost-id", json={"phone": "555-0200"})

        assert resp.status_code == 404
        assert resp.json()["code"] == "BRANCH_NOT_FOUND"
        assert client.get(BRANCHES).json()["data"] == []


class TestBranchValidation:

    def test_missing_fields_are_all_reported(self, client):
        resp = client.post(BRANCHES, json={"name": "M"})

        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Validation error: "
            '"name" length must be at least 2 characters long, '
            "Address is required, Phone number is required"
        }

    def test_bad_phone(self, client):
        resp = client.post(BRANCHES, json={**MAIN_BRANCH, "phone": "call me"})

        assert resp.status_code == 400
        assert "fails to match the required pattern" in resp.json()["error"]

    def test_unknown_field_is_rejected(self, client):
        resp = client.post(BRANCHES, json={**MAIN_BRANCH, "manager": "Jane"})

        assert resp.status_code == 400
        assert resp.json()["error"] == 'Validation error: "manager" is not allowed'

    def test_invalid_json_body(self, client):
        resp = client.post(BRANCHES, content=b"{not json", headers={"Content-Type": "application/json"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Validation error: request body must be valid JSON"}

    def test_non_object_body(self, client):
        resp = client.post(BRANCHES, json=["Main"])

        assert resp.status_code == 400
        assert resp.json() == {"error": 'Validation error: "value" must be of type object'}

    def test_unknown_query_key_is_rejected(self, client):
        resp = client.post(BRANCHES, json=MAIN_BRANCH, params={"manager": "Jane"})

        assert resp.status_code == 400
        assert resp.json() == {"error": 'Validation error: "manager" is not allowed'}

    def test_empty_id_from_query(self, client):
        resp = client.get(f"{BRANCHES}/b1", params={"id": ""})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Validation error: ID cannot be empty"}


class TestRequestId:

    def test_generated_on_success_and_error(self, client):
        assert client.get(BRANCHES).headers.get(REQUEST_ID_HEADER)
        assert client.get(f"{BRANCHES}/ghost-id").headers.get(REQUEST_ID_HEADER)
        assert client.post(BRANCHES, json={}).headers.get(REQUEST_ID_HEADER)

    def test_incoming_id_is_echoed(self, client):
        resp = client.get(BRANCHES, headers={REQUEST_ID_HEADER: "trace-123"})
        assert resp.headers[REQUEST_ID_HEADER] == "trace-123"


class TestPathAddressesTheBranch:
    """
    Behavior:
        - query parameters are validated but never pick the branch a route acts on
        - only the JSON body is written to the store
    """

    def create_two(self, client) -> tuple[str, str]:
        first = create_main_branch(client)["id"]
        second = client.post(BRANCHES, json={**MAIN_BRANCH, "name": "Second"}).json()["data"]["id"]
        return first, second

    def test_get_uses_path_id(self, client):
        first, second = self.create_two(client)

        resp = client.get(f"{BRANCHES}/{first}", params={"id": second})

        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == first

    def test_get_ghost_path_id_stays_404(self, client):
        _, second = self.create_two(client)

        resp = client.get(f"{BRANCHES}/ghost-id", params={"id": second})

        assert resp.status_code == 404
        assert resp.json()["code"] == "BRANCH_NOT_FOUND"

    def test_delete_uses_path_id(self, client):
        first, second = self.create_two(client)

        resp = client.delete(f"{BRANCHES}/{first}", params={"id": second})

        assert resp.status_code == 200
        assert client.get(f"{BRANCHES}/{first}").status_code == 404
        assert client.get(f"{BRANCHES}/{second}").status_code == 200

    def test_update_uses_path_id(self, client):
        first, second = self.create_two(client)

        resp = client.put(f"{BRANCHES}/{first}", params={"id": second}, json={"phone": "555-0200"})

        assert resp.json()["data"]["id"] == first
        assert client.get(f"{BRANCHES}/{first}").json()["data"]["phone"] == "555-0200"
        assert client.get(f"{BRANCHES}/{second}").json()["data"]["phone"] == "555-0100"

    def test_update_ignores_query_fields(self, client):
        first, _ = self.create_two(client)

        resp = client.put(f"{BRANCHES}/{first}", params={"name": "Query Name"}, json={"phone": "555-0200"})

        assert resp.status_code == 200
        assert resp.json()["data"]["name"] == "Main"
        assert client.get(f"{BRANCHES}/{first}").json()["data"]["name"] == "Main"

    def test_create_stores_body_only(self, client):
        resp = client.post(BRANCHES, params={"name": "Query Name"}, json=MAIN_BRANCH)

        assert resp.status_code == 201
        created = resp.json()["data"]
        assert created["name"] == "Main"
        assert client.get(f"{BRANCHES}/{created['id']}").json()["data"]["name"] == "Main"

    def test_query_values_are_still_validated(self, client):
        first, _ = self.create_two(client)

        resp = client.put(f"{BRANCHES}/{first}", params={"name": "M"}, json={"phone": "555-0200"})

        assert resp.status_code == 400
        assert resp.json() == {"error": 'Validation error: "name" length must be at least 2 characters long'}
