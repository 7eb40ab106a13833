"""
DynamoDB-backed cycle record source.

Items live in a single table. Tracked people are stored under the owner's
partition, cycle records under each person's partition:

    PK=OWNER#<owner_id>   SK=PERSON#<person_id>
    PK=PERSON#<person_id> SK=CYCLE#<period_start_date>#<record_id>
"""
import os
from typing import Any, Dict, List, Optional
import boto3
from boto3.dynamodb.conditions import Key
from aws_lambda_powertools import Logger

from cycle_engine.models.cycle import CycleRecord
from cycle_engine.services.records import parse_cycle_record
from cycle_engine.services.utils import sort_records

logger = Logger()

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Read-only client for the tracker table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_condition: Optional[Key] = None
    ) -> List[Dict[str, Any]]:
        """
        Query items using partition key and optional sort key condition.

        Follows LastEvaluatedKey so large partitions are returned in full.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_condition: Optional sort key condition

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_condition is not None:
            key_condition = key_condition & sort_key_condition

        items = []
        kwargs = {"KeyConditionExpression": key_condition}
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

def create_owner_pk(owner_id: str) -> str:
    """Create partition key for the account that tracks people."""
    return f"OWNER#{owner_id}"

def create_person_pk(person_id: str) -> str:
    """Create partition key for a tracked person."""
    return f"PERSON#{person_id}"

def create_cycle_sk(period_start_date: str, record_id: str) -> str:
    """Create sort key for a cycle record."""
    return f"CYCLE#{period_start_date}#{record_id}"

class DynamoRecordSource:
    """
    Cycle record source reading from the tracker table.

    Example:
        >>> source = DynamoRecordSource(owner_id="42")
        >>> records = source.list_cycle_records("self")
    """

    def __init__(self, owner_id: str, dynamo: Optional[DynamoDBClient] = None):
        self.owner_id = owner_id
        self.dynamo = dynamo or get_dynamo()

    def list_tracked_persons(self) -> List[str]:
        items = self.dynamo.query_items(
            partition_key="PK",
            partition_value=create_owner_pk(self.owner_id),
            sort_key_condition=Key("SK").begins_with("PERSON#")
        )
        return [item["SK"].split("#", 1)[1] for item in items]

    def list_cycle_records(self, person_id: str) -> List[CycleRecord]:
        items = self.dynamo.query_items(
            partition_key="PK",
            partition_value=create_person_pk(person_id),
            sort_key_condition=Key("SK").begins_with("CYCLE#")
        )
        records = [
            parse_cycle_record(
                {k: v for k, v in item.items() if k not in ("PK", "SK")},
                person_id=person_id
            )
            for item in items
        ]
        logger.debug("Loaded cycle records", extra={
            "person_id": person_id,
            "count": len(records)
        })
        return sort_records(records)
