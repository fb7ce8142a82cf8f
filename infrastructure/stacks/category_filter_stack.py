"""
CDK Stack for the Category Filter.

Provisions the Transients table, the shared code layer, the filter endpoint
behind an HTTP API and the content-event Lambda that invalidates caches.
"""
from aws_cdk import (
    Stack,
    Duration,
    RemovalPolicy,
    CfnOutput,
    aws_apigatewayv2 as apigwv2,
    aws_dynamodb as dynamodb,
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from constructs import Construct


class CategoryFilterStack(Stack):
    """
    CDK Stack for the category filter endpoint.

    Routes:
    - POST /filter - Filtered listing fragment
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: dict,
        env_name: str,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.config = config
        self.env_name = env_name

        self.transients_table = self._create_transients_table()
        self.shared_layer = self._create_shared_layer()

        self.filter_handler = self._create_filter_handler()
        self.content_event_handler = self._create_content_event_handler()

        self.http_api = self._create_http_api()
        self._add_routes()
        self._create_content_event_rule()

        self._create_outputs()

    def _removal_policy(self) -> RemovalPolicy:
        return RemovalPolicy.DESTROY if self.env_name == "dev" else RemovalPolicy.RETAIN

    def _create_transients_table(self) -> dynamodb.Table:
        """Create Transients DynamoDB table."""
        return dynamodb.Table(
            self,
            "TransientsTable",
            table_name=f"Transients-{self.env_name}",
            partition_key=dynamodb.Attribute(
                name="transientKey",
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            time_to_live_attribute="expiresAt",
            removal_policy=self._removal_policy(),
        )

    def _create_shared_layer(self) -> lambda_.LayerVersion:
        """Create Lambda Layer with shared code.

        Lambda Layers require a specific directory structure:
        lambda_layer/python/category_filter/  <- package goes here
        """
        return lambda_.LayerVersion(
            self,
            "SharedLayer",
            layer_version_name=f"category-filter-shared-{self.env_name}",
            code=lambda_.Code.from_asset("../lambda_layer"),
            compatible_runtimes=[lambda_.Runtime.PYTHON_3_11],
            description="category_filter package with requests, beautifulsoup4 and PyJWT",
            removal_policy=self._removal_policy(),
        )

    def _common_environment(self) -> dict:
        return {
            "ENV": self.env_name,
            "TRANSIENTS_TABLE_NAME": self.transients_table.table_name,
            "LOG_LEVEL": self.config.get("logLevel", "INFO"),
            "ENABLE_METRICS": str(self.config.get("enableMetrics", True)).lower(),
        }

    def _create_filter_handler(self) -> lambda_.Function:
        """Create Lambda function for the filter endpoint."""
        nonce_secret = self.node.try_get_context("nonceSecret") or self.config.get("nonceSecret", "")

        function = lambda_.Function(
            self,
            "FilterHandler",
            function_name=f"category-filter-handler-{self.env_name}",
            runtime=lambda_.Runtime.PYTHON_3_11,
            handler="handler.lambda_handler",
            code=lambda_.Code.from_asset("../lambda/filter_handler"),
            layers=[self.shared_layer],
            timeout=Duration.seconds(15),
            memory_size=512,
            environment={
                **self._common_environment(),
                "SITE_URL": self.config.get("siteUrl", ""),
                "NONCE_SECRET": nonce_secret,
                "FRAGMENT_CACHE_TTL_SECONDS": str(self.config.get("fragmentCacheTtlSeconds", 300)),
                "FETCH_TIMEOUT_SECONDS": str(self.config.get("fetchTimeoutSeconds", 10)),
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.transients_table.grant_read_write_data(function)

        function.add_to_role_policy(
            iam.PolicyStatement(
                actions=["cloudwatch:PutMetricData"],
                resources=["*"]
            )
        )

        return function

    def _create_content_event_handler(self) -> lambda_.Function:
        """Create Lambda function that bumps the cache version."""
        function = lambda_.Function(
            self,
            "ContentEventHandler",
            function_name=f"category-filter-content-events-{self.env_name}",
            runtime=lambda_.Runtime.PYTHON_3_11,
            handler="handler.lambda_handler",
            code=lambda_.Code.from_asset("../lambda/content_event_handler"),
            layers=[self.shared_layer],
            timeout=Duration.seconds(10),
            environment=self._common_environment(),
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.transients_table.grant_read_write_data(function)
        return function

    def _create_http_api(self) -> apigwv2.CfnApi:
        """Create HTTP API Gateway using stable CDK constructs."""
        return apigwv2.CfnApi(
            self,
            "FilterHttpApi",
            name=f"category-filter-http-api-{self.env_name}",
            description="Filtered blog listing fragments",
            protocol_type="HTTP",
            cors_configuration=apigwv2.CfnApi.CorsProperty(
                allow_origins=self.config.get("corsAllowOrigins", ["*"]),
                allow_methods=["POST", "OPTIONS"],
                allow_headers=["Content-Type"],
                max_age=3600,
            ),
        )

    def _add_routes(self):
        """Add HTTP routes to the API."""
        integration = apigwv2.CfnIntegration(
            self,
            "FilterHandlerIntegration",
            api_id=self.http_api.ref,
            integration_type="AWS_PROXY",
            integration_uri=f"arn:aws:apigateway:{self.region}:lambda:path/2015-03-31/functions/{self.filter_handler.function_arn}/invocations",
            payload_format_version="2.0",
            timeout_in_millis=15000,
        )

        self.filter_handler.add_permission(
            "HttpApiInvokePermission",
            principal=iam.ServicePrincipal("apigateway.amazonaws.com"),
            source_arn=f"arn:aws:execute-api:{self.region}:{self.account}:{self.http_api.ref}/*",
        )

        apigwv2.CfnRoute(
            self,
            "FilterRoute",
            api_id=self.http_api.ref,
            route_key="POST /filter",
            target=f"integrations/{integration.ref}",
        )

        apigwv2.CfnStage(
            self,
            "HttpApiStage",
            api_id=self.http_api.ref,
            stage_name="$default",
            auto_deploy=True,
        )

    def _create_content_event_rule(self):
        """Route post and term mutations to the content-event Lambda."""
        rule = events.Rule(
            self,
            "ContentEventRule",
            rule_name=f"category-filter-content-events-{self.env_name}",
            description="Invalidate category filter caches on content changes",
            event_pattern=events.EventPattern(
                source=["content-repository"],
                detail_type=[
                    "Post Saved",
                    "Post Deleted",
                    "Term Created",
                    "Term Edited",
                    "Term Deleted",
                ],
            ),
            enabled=True,
        )

        rule.add_target(
            targets.LambdaFunction(
                self.content_event_handler,
                retry_attempts=2,
            )
        )

    def _create_outputs(self):
        """Create CloudFormation outputs."""
        CfnOutput(
            self,
            "FilterEndpoint",
            value=f"https://{self.http_api.ref}.execute-api.{self.region}.amazonaws.com/filter",
            description="Filter endpoint URL (SCF_BLOG_FILTER.ajaxUrl)",
            export_name=f"CategoryFilterEndpoint-{self.env_name}",
        )

        CfnOutput(
            self,
            "TransientsTableName",
            value=self.transients_table.table_name,
            description="Transients table name",
            export_name=f"CategoryFilterTransientsTable-{self.env_name}",
        )
