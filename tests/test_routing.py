import threading

from restive import Resource, Route, Router


class Projects(Resource):
    def get(self):
        return []


class Project(Resource):
    def get(self):
        return {"id": self.path_params["project_id"]}


class TestRoute:
    def test_build_resource(self, make_request):
        request = make_request()
        route = Route("/projects", Projects)

        resource = route.build_resource(request)
        assert isinstance(resource, Projects)
        assert resource.request is request

    def test_build_resource_creates_new_instances(self, make_request):
        request = make_request()
        route = Route("/projects", Projects)

        assert route.build_resource(request) is not route.build_resource(request)


class TestRouter:
    def test_resolve(self, make_request):
        router = Router()
        projects = router.add("/projects", Projects)
        project = router.add("/projects/<int:project_id>", Project)

        assert router.resolve(make_request("/projects")) == (projects, {})
        assert router.resolve(make_request("/projects/42")) == (project, {"project_id": 42})

    def test_resolve_ignores_method(self, make_request):
        router = Router()
        route = router.add("/projects", Projects)

        assert router.resolve(make_request("/projects", method="DELETE"))[0] is route
        assert router.resolve(make_request("/projects", method="PROPFIND"))[0] is route

    def test_resolve_without_match(self, make_request):
        router = Router()
        router.add("/projects", Projects)

        assert router.resolve(make_request("/users")) == (None, {})
        assert router.resolve(make_request("/projects/abc")) == (None, {})

    def test_route_decorator(self, make_request):
        router = Router()

        @router.route("/things/<name>")
        class Thing(Resource):
            def get(self):
                return self.path_params["name"]

        assert Thing.__name__ == "Thing"
        route, args = router.resolve(make_request("/things/foo"))
        assert route.resource_class is Thing
        assert args == {"name": "foo"}

    def test_routes(self):
        router = Router()
        router.add("/projects", Projects)
        router.add("/projects/<project_id>", Project)

        assert [route.resource_class for route in router.routes] == [Projects, Project]

    def test_concurrent_add(self, make_request):
        router = Router()

        def _add(i):
            router.add(f"/resource-{i}", Projects)

        threads = [threading.Thread(target=_add, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(router.routes) == 20
        assert router.resolve(make_request("/resource-7"))[0] is not None
