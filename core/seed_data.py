# Built-in dataset used when a collection has never been saved (or its stored value is unreadable)

SEED_PROJECTS = [
    {
        "id": "p1", "name": "Green Valley Residency", "projectCode": "GVR", "address": "Sector 21, Gandhinagar",
        "startDate": "2024-01-10", "completionDate": "2025-06-30", "budget": 25000000, "status": "In Progress",
        "completionPercentage": 45, "spent": 9800000, "client": "Green Valley Developers",
    },
    {
        "id": "p2", "name": "Metro City Mall Site", "projectCode": "", "address": "SG Highway, Ahmedabad",
        "startDate": "2024-03-01", "completionDate": "2025-12-31", "budget": 48000000, "status": "In Progress",
        "completionPercentage": 20, "spent": 16500000, "client": "Metro Retail Ltd",
    },
    {
        "id": "p3", "name": "Riverside Warehouse", "projectCode": "RSW", "address": "Naroda GIDC, Ahmedabad",
        "startDate": "2024-06-15", "completionDate": None, "budget": 9000000, "status": "Planning",
        "completionPercentage": 0, "spent": 0, "client": "Shree Logistics",
    },
]

SEED_WORKERS = [
    {"id": "w1", "workerId": "SNE/GVR-001", "name": "Ramesh Patel", "projectId": "p1", "designation": "Mason", "serialNo": 1, "joiningDate": "2024-01-15", "exitDate": ""},
    {"id": "w2", "workerId": "SNE/GVR-002", "name": "Suresh Yadav", "projectId": "p1", "designation": "Helper", "serialNo": 2, "joiningDate": "2024-01-15", "exitDate": ""},
    {"id": "w3", "workerId": "SNE/GVR-003", "name": "Mahesh Kumar", "projectId": "p1", "designation": "Carpenter", "serialNo": 3, "joiningDate": "2024-02-01", "exitDate": ""},
    {"id": "w4", "workerId": "SNE/MM-001", "name": "Dinesh Solanki", "projectId": "p2", "designation": "Bar Bender", "serialNo": 1, "joiningDate": "2024-03-05", "exitDate": ""},
    {"id": "w5", "workerId": "SNE/MM-002", "name": "Ganesh Thakor", "projectId": "p2", "designation": "Helper", "serialNo": 2, "joiningDate": "2024-03-05", "exitDate": ""},
]

SEED_BILLS = [
    {"id": "b1", "projectId": "p1", "billNo": "RA-01", "workNature": "Foundation & plinth", "amount": 1800000, "billingMonth": "2024-03", "gstAmount": 324000, "grandTotal": 2124000, "certifyDate": "2024-04-05", "serialNo": 1},
    {"id": "b2", "projectId": "p2", "billNo": "RA-01", "workNature": "Excavation", "amount": 950000, "billingMonth": "2024-04", "gstAmount": 171000, "grandTotal": 1121000, "certifyDate": "2024-05-02", "serialNo": 2},
]

SEED_CLIENT_PAYMENTS = [
    {"id": "cp1", "projectId": "p1", "date": "2024-04-20", "amount": 2000000, "remarks": "RA-01 part payment"},
    {"id": "cp2", "projectId": "p2", "date": "2024-05-15", "amount": 1121000, "remarks": "RA-01 full"},
]

SEED_KHARCHI = [
    {"id": "w1-2024-03-03", "workerId": "w1", "projectId": "p1", "date": "2024-03-03", "amount": 500},
    {"id": "w2-2024-03-03", "workerId": "w2", "projectId": "p1", "date": "2024-03-03", "amount": 400},
    {"id": "w1-2024-03-10", "workerId": "w1", "projectId": "p1", "date": "2024-03-10", "amount": 500},
]

SEED_ADVANCES = [
    {"id": "a1", "workerId": "w1", "projectId": "p1", "amount": 2000, "paidBy": "Admin", "remarks": "Festival advance", "date": "2024-03-08", "paymentMode": "Cash", "serialNo": 1},
    {"id": "a2", "workerId": "w4", "projectId": "p2", "amount": 1500, "paidBy": "Site Engineer", "remarks": "", "date": "2024-04-12", "paymentMode": "UPI", "serialNo": 2},
]

SEED_PURCHASES = [
    {"id": "pu1", "projectId": "p1", "date": "2024-02-10", "description": "Cement", "quantity": 500, "unit": "Bags", "rate": 380, "totalAmount": 190000, "serialNo": 1},
    {"id": "pu2", "projectId": "p1", "date": "2024-02-12", "description": "TMT Steel", "quantity": 12, "unit": "MT", "rate": 62000, "totalAmount": 744000, "serialNo": 2},
    {"id": "pu3", "projectId": "p2", "date": "2024-03-20", "description": "Cement", "quantity": 300, "unit": "Bags", "rate": 385, "totalAmount": 115500, "serialNo": 3},
]

SEED_EXECUTION = [
    {"id": "e1", "projectId": "p1", "levelName": "Level 1", "pours": [{"label": "Pour 1", "date": "2024-03-15"}, {"label": "Pour 2", "date": "2024-03-28"}]},
    {"id": "e2", "projectId": "p1", "levelName": "Level 2", "pours": [{"label": "Pour 1", "date": "2024-04-20"}]},
]

SEED_MESS = [
    {"id": "m1", "projectId": "p1", "workerCount": 25, "rate": 90, "totalAmount": 2250, "amountPaid": 2000, "balance": 250},
]

SEED_ATTENDANCE = [
    {"id": "w1-2024-03-04", "workerId": "w1", "projectId": "p1", "date": "2024-03-04", "status": "Present"},
    {"id": "w2-2024-03-04", "workerId": "w2", "projectId": "p1", "date": "2024-03-04", "status": "Half Day"},
    {"id": "w3-2024-03-04", "workerId": "w3", "projectId": "p1", "date": "2024-03-04", "status": "Absent"},
]

SEED_CONSUMPTION = [
    {"id": "c1", "projectId": "p1", "materialName": "cement", "quantity": 180, "unit": "Bags", "activity": "Footing concrete", "date": "2024-02-20"},
]

SEED_COLLECTIONS = {
    "projects": SEED_PROJECTS,
    "workers": SEED_WORKERS,
    "bills": SEED_BILLS,
    "client_payments": SEED_CLIENT_PAYMENTS,
    "kharchi": SEED_KHARCHI,
    "advances": SEED_ADVANCES,
    "purchases": SEED_PURCHASES,
    "execution": SEED_EXECUTION,
    "mess": SEED_MESS,
    "worker_payments": [],
    "attendance": SEED_ATTENDANCE,
    "consumption": SEED_CONSUMPTION,
}
