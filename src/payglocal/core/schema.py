"""
Pydantic models describing the pay-collect payment initiation payload.

Every model forbids unknown keys and uses strict scalar types, so the
gateway's field names and JSON types are enforced exactly. Only
``merchantTxnId``, ``merchantCallbackURL``, ``paymentData`` and the two
``paymentData`` amount fields are mandatory; everything else is optional.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr

__all__ = ["PayCollectPayload", "SCHEMA_VERSION"]

SCHEMA_VERSION = "paycollect-v1"

Text = Optional[StrictStr]


class _Closed(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CardData(_Closed):
    number: Text = None
    expiryMonth: Text = None
    expiryYear: Text = None
    securityCode: Text = None
    type: Text = None


class TokenData(_Closed):
    number: Text = None
    expiryMonth: Text = None
    expiryYear: Text = None
    cryptogram: Text = None
    firstSix: Text = None
    lastFour: Text = None
    cardBrand: Text = None
    cardCountryCode: Text = None
    cardIssuerName: Text = None
    cardType: Text = None
    cardCategory: Text = None


class BillingData(_Closed):
    firstName: Text = None
    lastName: Text = None
    addressStreet1: Text = None
    addressStreet2: Text = None
    addressCity: Text = None
    addressState: Text = None
    addressPostalCode: Text = None
    emailId: Text = None
    phoneNumber: Text = None


class ShippingData(BillingData):
    addressStateCode: Text = None
    addressCountry: Text = None


class PaymentData(_Closed):
    totalAmount: StrictStr
    txnCurrency: StrictStr
    cardData: Optional[CardData] = None
    tokenData: Optional[TokenData] = None
    billingData: Optional[BillingData] = None


class StandingInstructionData(_Closed):
    amount: Text = None
    maxAmount: Text = None
    numberOfPayments: Text = None
    frequency: Text = None
    type: Text = None
    startDate: Text = None


class StandingInstruction(_Closed):
    data: Optional[StandingInstructionData] = None


class OrderItem(_Closed):
    productDescription: Text = None
    productSKU: Text = None
    productType: Text = None
    itemUnitPrice: Text = None
    itemQuantity: Text = None


class CustomerData(_Closed):
    customerAccountType: Text = None
    customerSuccessOrderCount: Text = None
    customerAccountCreationDate: Text = None
    merchantAssignedCustomerId: Text = None


class Passenger(_Closed):
    title: Text = None
    firstName: Text = None
    lastName: Text = None
    dateOfBirth: Text = None
    type: Text = None
    email: Text = None
    passportNumber: Text = None
    passportCountry: Text = None
    passportIssueDate: Text = None
    passportExpiryDate: Text = None
    referenceNumber: Text = None


class FlightLeg(_Closed):
    routeId: Text = None
    legId: Text = None
    flightNumber: Text = None
    departureDate: Text = None
    departureAirportCode: Text = None
    departureCity: Text = None
    departureCountry: Text = None
    arrivalDate: Text = None
    arrivalAirportCode: Text = None
    arrivalCity: Text = None
    arrivalCountry: Text = None
    carrierCode: Text = None
    carrierName: Text = None
    serviceClass: Text = None


class FlightData(_Closed):
    agentCode: Text = None
    agentName: Text = None
    ticketNumber: Text = None
    reservationDate: Text = None
    ticketIssueCity: Text = None
    ticketIssueState: Text = None
    ticketIssueCountry: Text = None
    ticketIssuePostalCode: Text = None
    reservationCode: Text = None
    reservationSystem: Text = None
    journeyType: Text = None
    electronicTicket: Text = None
    refundable: Text = None
    ticketType: Text = None
    legData: Optional[List[FlightLeg]] = None
    passengerData: Optional[List[Passenger]] = None


class GroundLeg(_Closed):
    routeId: Text = None
    legId: Text = None
    departureDate: Text = None
    departureCity: Text = None
    departureCountry: Text = None
    arrivalDate: Text = None
    arrivalCity: Text = None
    arrivalCountry: Text = None


class TrainLeg(GroundLeg):
    trainNumber: Text = None


class BusLeg(GroundLeg):
    busNumber: Text = None


class ShipLeg(GroundLeg):
    shipNumber: Text = None


class CabLeg(_Closed):
    routeId: Text = None
    legId: Text = None
    pickupDate: Text = None
    departureCity: Text = None
    departureCountry: Text = None
    arrivalCity: Text = None
    arrivalCountry: Text = None


class TrainData(_Closed):
    ticketNumber: Text = None
    reservationDate: Text = None
    legData: Optional[List[TrainLeg]] = None
    passengerData: Optional[List[Passenger]] = None


class BusData(_Closed):
    ticketNumber: Text = None
    reservationDate: Text = None
    legData: Optional[List[BusLeg]] = None
    passengerData: Optional[List[Passenger]] = None


class ShipData(_Closed):
    ticketNumber: Text = None
    reservationDate: Text = None
    legData: Optional[List[ShipLeg]] = None
    passengerData: Optional[List[Passenger]] = None


class CabData(_Closed):
    reservationDate: Text = None
    legData: Optional[List[CabLeg]] = None
    passengerData: Optional[List[Passenger]] = None


class Room(_Closed):
    roomType: Text = None
    roomCategory: Text = None
    roomPrice: Text = None
    numberOfGuests: Text = None
    numberOfNights: Text = None
    guestFirstName: Text = None
    guestLastName: Text = None
    guestEmail: Text = None


class LodgingData(_Closed):
    checkInDate: Text = None
    checkOutDate: Text = None
    lodgingType: Text = None
    lodgingName: Text = None
    city: Text = None
    country: Text = None
    rating: Text = None
    cancellationPolicy: Text = None
    bookingPersonFirstName: Text = None
    bookingPersonLastName: Text = None
    bookingPersonEmailId: Text = None
    bookingPersonCallingCode: Text = None
    bookingPersonPhoneNumber: Text = None
    rooms: Optional[List[Room]] = None


class RiskData(_Closed):
    orderData: Optional[List[OrderItem]] = None
    customerData: Optional[CustomerData] = None
    shippingData: Optional[ShippingData] = None
    flightData: Optional[List[FlightData]] = None
    trainData: Optional[List[TrainData]] = None
    busData: Optional[List[BusData]] = None
    shipData: Optional[List[ShipData]] = None
    cabData: Optional[List[CabData]] = None
    lodgingData: Optional[List[LodgingData]] = None


class PayCollectPayload(_Closed):
    """Top level of a pay-collect request as the gateway accepts it."""

    merchantTxnId: StrictStr
    merchantUniqueId: Text = None
    merchantCallbackURL: StrictStr
    captureTxn: Optional[StrictBool] = None
    gpiTxnTimeout: Text = None
    paymentData: PaymentData
    standingInstruction: Optional[StandingInstruction] = None
    riskData: Optional[RiskData] = None
