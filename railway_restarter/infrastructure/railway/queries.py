"""GraphQL documents for the Railway public API."""

ENVIRONMENTS_QUERY = """
query environments($projectId: String!) {
    environments(projectId: $projectId) {
        edges {
            node {
                id
                name
                deployments {
                    edges {
                        node {
                            id
                            status
                            serviceId
                        }
                    }
                }
                serviceInstances {
                    edges {
                        node {
                            id
                            serviceId
                            serviceName
                        }
                    }
                }
            }
        }
    }
}
"""

SERVICE_QUERY = """
query service($id: String!) {
    service(id: $id) {
        id
        name
        deployments {
            edges {
                node {
                    id
                    status
                    environmentId
                }
            }
        }
    }
}
"""

METRICS_QUERY = """
query metrics(
    $startDate: DateTime!
    $projectId: String!
    $serviceId: String!
    $environmentId: String
    $measurements: [MetricMeasurement!]!
) {
    metrics(
        projectId: $projectId
        serviceId: $serviceId
        environmentId: $environmentId
        measurements: $measurements
        startDate: $startDate
    ) {
        measurement
        values {
            ts
            value
        }
    }
}
"""

DEPLOYMENT_RESTART_MUTATION = """
mutation deploymentRestart($id: String!) {
    deploymentRestart(id: $id)
}
"""
