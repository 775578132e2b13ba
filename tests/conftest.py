"""Pytest fixtures and sample payloads for the LEAN encoder test suite."""

import pytest

from lean_encoder import EncoderConfig, LeanEncoder
from lean_encoder.adapters import GenericAdapter


# ============================================================================
# ENCODER FIXTURES
# ============================================================================


@pytest.fixture
def encoder():
    """Encoder with default config and the generic adapter."""
    return LeanEncoder()


@pytest.fixture
def strict_encoder():
    """Encoder that propagates errors instead of falling back."""
    return LeanEncoder(EncoderConfig(fallback_on_fail=False))


@pytest.fixture
def generic_adapter():
    return GenericAdapter()


# ============================================================================
# VENDOR PAYLOADS
# ============================================================================


def _maximo_record(num, description, status, priority, asset, worktype, report, target,
                   location, supervisor, act, est):
    return {
        "href": f"https://maximo.example.com/maximo/oslc/os/mxwo/{num}",
        "spi:wonum": f"WO{num}",
        "spi:description": description,
        "spi:status": status,
        "spi:priority": priority,
        "spi:siteid": "BEDFORD",
        "spi:assetnum": asset,
        "spi:worktype": worktype,
        "spi:reportdate": report,
        "spi:targcompdate": target,
        "spi:location": location,
        "spi:supervisor": supervisor,
        "spi:actlabhrs": act,
        "spi:estlabhrs": est,
        "_rowstamp": f"88{num}",
        "localref": f"oslc/os/mxwo/_{num}",
    }


@pytest.fixture
def maximo_payload():
    """Maximo OSLC work order collection with three members."""
    return {
        "href": "https://maximo.example.com/maximo/oslc/os/mxwo",
        "totalCount": 3,
        "member": [
            _maximo_record(
                1001, "Fix HVAC unit in Building A", "WAPPR", 1, "ASSET-001", "PM",
                "2024-01-15T08:00:00+00:00", "2024-01-20T17:00:00+00:00",
                "BUILDING-A", "John Smith", 4.5, 6.0,
            ),
            _maximo_record(
                1002, "Replace water pump in Block B", "INPRG", 2, "ASSET-002", "CM",
                "2024-01-16T09:00:00+00:00", "2024-01-22T17:00:00+00:00",
                "BUILDING-B", "Jane Doe", 2.0, 8.0,
            ),
            _maximo_record(
                1003, "Electrical inspection of main switchboard", "WAPPR", 1, "ASSET-003",
                "PM", "2024-01-17T07:30:00+00:00", "2024-01-25T17:00:00+00:00",
                "BUILDING-A", "John Smith", 0, 3.0,
            ),
        ],
    }


def _snow_ref(table, sys_id):
    return {
        "link": f"https://instance.service-now.com/api/now/table/{table}/{sys_id}",
        "value": sys_id,
    }


def _snow_incident(sys_id, number, short, description, state, priority, category,
                   subcategory, assignee, group, caller, opened, updated):
    return {
        "sys_id": sys_id,
        "number": number,
        "short_description": short,
        "description": description,
        "state": state,
        "priority": priority,
        "urgency": priority,
        "impact": priority,
        "category": category,
        "subcategory": subcategory,
        "assigned_to": _snow_ref("sys_user", assignee),
        "assignment_group": _snow_ref("sys_user_group", group),
        "caller_id": _snow_ref("sys_user", caller),
        "opened_at": opened,
        "resolved_at": "",
        "sys_created_on": opened,
        "sys_updated_on": updated,
        "sys_class_name": "incident",
        "sys_domain": _snow_ref("sys_user_group", "global"),
    }


@pytest.fixture
def servicenow_payload():
    """ServiceNow Table API incident list with three results."""
    return {
        "result": [
            _snow_incident(
                "abc123def456ghi789", "INC0010001", "User cannot login to VPN",
                "User reports complete inability to authenticate to corporate VPN.",
                "1", "2", "network", "vpn", "xyz789", "grp01", "USR001",
                "2024-01-15 08:30:00", "2024-01-15 10:00:00",
            ),
            _snow_incident(
                "def456ghi789jkl012", "INC0010002", "Printer offline on 3rd floor",
                "HP LaserJet in finance department showing offline.",
                "2", "3", "hardware", "printer", "abc123", "grp02", "USR002",
                "2024-01-16 09:00:00", "2024-01-16 11:30:00",
            ),
            _snow_incident(
                "ghi789jkl012mno345", "INC0010003", "Email delivery delays",
                "Exchange server showing high queue backlog.",
                "1", "1", "network", "email", "xyz789", "grp01", "USR003",
                "2024-01-17 07:00:00", "2024-01-17 07:45:00",
            ),
        ]
    }


def _sap_order(number, supplier, company, group, currency, rate, millis, amount, terms, city):
    uri = f"A_PurchaseOrder('{number}')"
    return {
        "__metadata": {
            "id": f"https://sap.example.com/sap/opu/odata/sap/API_PURCHASEORDER_PROCESS_SRV/{uri}",
            "type": "API_PURCHASEORDER_PROCESS_SRV.A_PurchaseOrderType",
            "uri": uri,
        },
        "PurchaseOrder": number,
        "PurchaseOrderType": "NB",
        "Supplier": supplier,
        "CompanyCode": company,
        "PurchasingOrganization": company,
        "PurchasingGroup": group,
        "DocumentCurrency": currency,
        "ExchangeRate": rate,
        "CreationDate": f"/Date({millis})/",
        "PurchaseOrderDate": f"/Date({millis})/",
        "TotalNetAmount": amount,
        "PaymentTerms": terms,
        "IncotermsLocation1": city,
        "to_PurchaseOrderItem": {"__deferred": {"uri": f"{uri}/to_PurchaseOrderItem"}},
    }


@pytest.fixture
def sap_payload():
    """SAP OData v2 purchase order response (``d.results``)."""
    return {
        "d": {
            "results": [
                _sap_order("4500000001", "VENDOR001", "1000", "001", "USD", "1.00000",
                           1705276800000, "15000.00", "NT30", "New York"),
                _sap_order("4500000002", "VENDOR002", "1000", "002", "EUR", "1.08000",
                           1705363200000, "8500.00", "NT30", "Frankfurt"),
                _sap_order("4500000003", "VENDOR001", "2000", "001", "USD", "1.00000",
                           1705449600000, "32000.00", "NT60", "Chicago"),
            ]
        }
    }


@pytest.fixture
def sap_v4_payload():
    """SAP OData v4 sales order response (``value``)."""
    return {
        "@odata.context": "$metadata#A_SalesOrder",
        "@odata.count": 2,
        "value": [
            {"SalesOrder": "0000000100", "SoldToParty": "CUST001", "CreationDate": "2024-01-15"},
            {"SalesOrder": "0000000101", "SoldToParty": "CUST002", "CreationDate": "2024-01-16"},
        ],
    }
