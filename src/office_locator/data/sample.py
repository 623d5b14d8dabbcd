"""Built-in office rows used when no data source is configured."""

SAMPLE_ROWS: tuple[dict, ...] = (
    {
        "Id": 1,
        "PcoName": "Cape Town Parliamentary Office",
        "Latlon": "-33.9249, 18.4241",
        "Address": "90 Plein Street, Cape Town, 8000",
        "Part": "Main",
        "Province": "Western Cape",
        "MP Name": "John Smith",
        "Party": "DA",
        "AdministratorDetails": "Main administrative office for Western Cape",
        "AdminPerson": "Jane Doe",
        "AdminPhone": "+27 21 123 4567",
        "AdminEmail": "admin.capetown@pmg.org.za",
    },
    {
        "Id": 2,
        "PcoName": "Johannesburg Parliamentary Office",
        "Latlon": "-26.2041, 28.0473",
        "Address": "123 Commissioner Street, Johannesburg, 2000",
        "Part": "Gauteng",
        "Province": "Gauteng",
        "MP Name": "Mary Johnson",
        "Party": "ANC",
        "AdministratorDetails": "Provincial office for Gauteng region",
        "AdminPerson": "Peter Wilson",
        "AdminPhone": "+27 11 987 6543",
        "AdminEmail": "admin.joburg@pmg.org.za",
    },
    {
        "Id": 3,
        "PcoName": "Durban Parliamentary Office",
        "Latlon": "-29.8587, 31.0218",
        "Address": "45 Victoria Street, Durban, 4000",
        "Part": "KwaZulu-Natal",
        "Province": "KwaZulu-Natal",
        "MP Name": "David Brown",
        "Party": "EFF",
        "AdministratorDetails": "Provincial office for KZN region",
        "AdminPerson": "Sarah Miller",
        "AdminPhone": "+27 31 456 7890",
        "AdminEmail": "admin.durban@pmg.org.za",
    },
    {
        "Id": 4,
        "PcoName": "Pietermaritzburg Office",
        "Latlon": "-29.6020, 30.3794",
        "Address": "12 Church Street, Pietermaritzburg, 3200",
        "Part": "KwaZulu-Natal",
        "MP Name": "Sarah Williams",
        "Party": "IFP",
        "AdministratorDetails": "Branch office for PMB region",
        "AdminPerson": "Michael Johnson",
        "AdminPhone": "+27 33 345 6789",
        "AdminEmail": "admin.pmb@pmg.org.za",
    },
    {
        "Id": 5,
        "PcoName": "Bloemfontein Office",
        "Latlon": "-29.0852, 26.1596",
        "Address": "78 President Brand Street, Bloemfontein, 9300",
        "Part": "Free State",
        "Province": "Free State",
        "MP Name": "Robert Davis",
        "Party": "DA",
        "AdministratorDetails": "Provincial office for Free State",
        "AdminPerson": "Linda van der Merwe",
        "AdminPhone": "+27 51 234 5678",
        "AdminEmail": "admin.bloem@pmg.org.za",
    },
)
